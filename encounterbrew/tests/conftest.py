"""
Pytest fixtures for Encounterbrew tests.
"""

import json

import pytest

from ..localization import Localizer, reset_localizer
from ..text_engine import DirectiveRewriter


LOCALIZATION_DATA = {
    "PF2E": {
        "NPC": {
            "Abilities": {
                "Glossary": {
                    "AttackOfOpportunity": "The monster can make an opportunity attack when a foe provokes.",
                    "Tremorsense": "The monster can sense the vibrations in the ground.",
                    "AllAroundVision": "The monster can see in all directions simultaneously.",
                },
            },
        },
        "Item": {
            "Weapon": {
                "Base": {
                    "club": "club",
                    "dagger": "dagger",
                },
            },
        },
        "TraitDescription": {
            "fire": "This effect deals fire damage.",
        },
    },
    "COMBAT": {
        "Begin": "Begin Encounter",
        "End": "End Encounter",
    },
    "TestData": {
        "WithNewlines": "Line 1\\nLine 2\\nLine 3",
        "WithExtraWhitespace": "  Text with spaces  \\n\\n\\n  More text  ",
        "WithDirective": "Deals @Damage[2d6[fire]] damage.",
    },
}


@pytest.fixture
def rewriter() -> DirectiveRewriter:
    """Rewriter with the default rule table."""
    return DirectiveRewriter()


@pytest.fixture
def localization_data() -> dict:
    return LOCALIZATION_DATA


@pytest.fixture
def localization_file(tmp_path, localization_data):
    """Write the sample localization document to disk."""
    path = tmp_path / "en.json"
    path.write_text(json.dumps(localization_data, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def localizer(localization_data) -> Localizer:
    return Localizer(localization_data, source="test")


@pytest.fixture(autouse=True)
def fresh_shared_localizer():
    """Every test starts and ends without a shared localizer."""
    reset_localizer()
    yield
    reset_localizer()
