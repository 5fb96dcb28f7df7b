"""
Directive Rules - The ordered rule table used by the rewriter.

Each rule pairs a stable name with a compiled pattern and a transform that
turns one match into display text. Rules are listed most specific first:

1. Dice rolls carrying a label:      [[/br 1d20+5]]{Initiative}
2. Bare dice rolls:                  [[/r 1d20+10]]
3. Level-scaled damage:              @Damage[(@item.level)[bleed]]
4. Dice damage:                      @Damage[2d6[fire]]
5-7. Area templates:                 @Template[cone|distance:60|traits:fire]
8-12. DC checks:                     @Check[reflex|dc:19|basic]
13-14. Compendium cross-references:  @UUID[Compendium.pf2e.equipment.Item.Magic-Wand]
Each family ends with a catch-all for fields in other orders or extra
fields, followed by fallbacks for leftover localize keys and unknown
@Word[...] directives.

Table order is part of the contract: every generic shape comes after the
specific shapes it could also match.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Callable

# Field content inside a directive body: no brackets, braces or separators.
_FIELD = r"[^\[\]{}|]+"
_CHECK_TYPE = r"[^\[\]{}|:@]+"
# Optional attached display text, consumed and discarded.
_DISCARDED_LABEL = r"(?:\{[^{}]*\})?"


@dataclass(frozen=True)
class DirectiveRule:
    """
    One entry of the rule table.

    The transform receives the match and returns the replacement text.
    """
    name: str
    pattern: re.Pattern[str]
    transform: Callable[[re.Match[str]], str]


def _rule(name: str, pattern: str, transform: Callable[[re.Match[str]], str]) -> DirectiveRule:
    return DirectiveRule(name=name, pattern=re.compile(pattern), transform=transform)


# =============================================================================
# Transforms
# =============================================================================

def _label(match: re.Match[str]) -> str:
    return match.group("label")


def _expression(match: re.Match[str]) -> str:
    return match.group("expr")


def _damage_type(match: re.Match[str]) -> str:
    return match.group("type")


def _damage_dice(match: re.Match[str]) -> str:
    formula = match.group("formula").strip()
    if formula.startswith("(") and formula.endswith(")"):
        formula = formula[1:-1].strip()
    damage_type = match.group("type")
    return " ".join(part for part in (formula, damage_type) if part)


def _template(match: re.Match[str]) -> str:
    return f"{match.group('shape')} ({match.group('distance')} feet)"


def _template_traits(match: re.Match[str]) -> str:
    traits = match.group("traits").replace(",", ", ")
    if not traits:
        return _template(match)
    return f"{match.group('shape')} ({match.group('distance')} feet, {traits})"


def _template_fields(match: re.Match[str]) -> str:
    """Templates with extra fields, or fields in an order the fixed shapes miss."""
    shape, *fields = match.group("body").split("|")
    distance = ""
    traits = ""
    for field in fields:
        if field.startswith("distance:"):
            distance = field[len("distance:"):]
        elif field.startswith("traits:"):
            traits = field[len("traits:"):].replace(",", ", ")

    if not distance:
        return shape
    if traits:
        return f"{shape} ({distance} feet, {traits})"
    return f"{shape} ({distance} feet)"


def _check(match: re.Match[str]) -> str:
    return f"DC {match.group('dc')} {match.group('type')}"


def _check_basic(match: re.Match[str]) -> str:
    return f"DC {match.group('dc')} basic {match.group('type')}"


def _check_show_dc(match: re.Match[str]) -> str:
    return f"DC {match.group('dc')} {match.group('type')} check"


def _check_traits(match: re.Match[str]) -> str:
    # traits:<namespace>:<namespace>:<suffix>
    segments = match.group("traits").split(":")
    if len(segments) < 3 or not segments[2]:
        return _check(match)
    suffix = segments[2].replace("-", " ")
    return f"{_check(match)} ({suffix})"


def _check_fields(match: re.Match[str]) -> str:
    """Checks whose fields come in an order none of the fixed shapes cover."""
    body = match.group("body")
    if not body:
        return ""

    check_type, *fields = body.split("|")
    dc = ""
    basic = False
    show_dc = False
    for field in fields:
        if field.startswith("dc:"):
            dc = field[len("dc:"):]
        elif field == "basic":
            basic = True
        elif field.startswith("showDC"):
            show_dc = True

    if not dc:
        return check_type
    if basic:
        return f"DC {dc} basic {check_type}"
    if show_dc:
        return f"DC {dc} {check_type} check"
    return f"DC {dc} {check_type}"


# Generic nouns for compendium entries referenced by opaque document id.
PACK_NOUNS = {
    "conditionitems": "condition",
    "spells-srd": "spell",
    "spells": "spell",
    "equipment": "item",
    "actionspf2e": "action",
}


def looks_like_id(slug: str) -> bool:
    """Opaque document ids are long runs mixing letters and digits."""
    return (
        len(slug) > 10
        and slug.isalnum()
        and any(c.isalpha() for c in slug)
        and any(c.isdigit() for c in slug)
    )


def humanize_slug(slug: str) -> str:
    return slug.replace("-", " ").replace("_", " ")


def _item_reference(match: re.Match[str]) -> str:
    slug = match.group("slug")
    if looks_like_id(slug):
        pack = match.group("pack").split(".")[-1]
        return PACK_NOUNS.get(pack, pack)
    return humanize_slug(slug)


def _item_reference_labeled(match: re.Match[str]) -> str:
    label = match.group("label")
    # A digit in the label means a valued condition ("Frightened 1").
    if any(c.isdigit() for c in label):
        return label
    if looks_like_id(match.group("slug")) and label:
        return label
    return humanize_slug(match.group("slug"))


def _actor_reference(match: re.Match[str]) -> str:
    if match.group("label"):
        return match.group("label")
    name = match.group("name")
    words = name.split()
    return words[-1] if words else name


def _compendium_reference(match: re.Match[str]) -> str:
    # Compendium.<system>.<pack>.<DocumentType>.<slug>
    if match.group("label"):
        return match.group("label")
    segments = match.group("path").split(".")
    slug = segments[-1]
    if looks_like_id(slug) and len(segments) > 1:
        return PACK_NOUNS.get(segments[1], segments[1])
    return humanize_slug(slug)


def _localize_fallback(match: re.Match[str]) -> str:
    if match.group("label"):
        return match.group("label")
    return humanize_slug(match.group("path").split(".")[-1])


def _unknown_directive(match: re.Match[str]) -> str:
    if match.group("label"):
        return match.group("label")

    body = match.group("body")
    for field in body.split("|"):
        if field.startswith("value:"):
            return field[len("value:"):]

    if "|" not in body:
        return body
    return match.group("word").lower()


# =============================================================================
# Rule table
# =============================================================================

ROLL_RULES = (
    _rule("roll_with_label_br", r"\[\[/br [^\]]+\]\]\{(?P<label>[^}]+)\}", _label),
    _rule("roll_with_label_r", r"\[\[/r [^\]]+\]\]\{(?P<label>[^}]+)\}", _label),
    _rule("roll_with_label_gmr", r"\[\[/gmr [^\]]+\]\]\{(?P<label>[^}]+)\}", _label),
    _rule("roll_inline", r"\[\[/r (?P<expr>[^\]]+)\]\]", _expression),
)

DAMAGE_RULES = (
    _rule(
        "damage_item_level",
        r"@Damage\[\(@item\.level\)\[(?P<type>[^\[\]{}]*)\]\]" + _DISCARDED_LABEL,
        _damage_type,
    ),
    _rule(
        "damage_dice",
        r"@Damage\[(?P<formula>[^\[\]{}@]*)\[(?P<type>[^\[\]{}]*)\]\]" + _DISCARDED_LABEL,
        _damage_dice,
    ),
)

TEMPLATE_RULES = (
    _rule(
        "template_labeled",
        rf"@Template\[(?P<shape>{_FIELD})\|distance:(?P<distance>{_FIELD})\]\{{[^{{}}]*\}}",
        _template,
    ),
    _rule(
        "template_traits",
        rf"@Template\[(?P<shape>{_FIELD})\|distance:(?P<distance>{_FIELD})"
        rf"\|traits:(?P<traits>[^\[\]{{}}|]*)\]" + _DISCARDED_LABEL,
        _template_traits,
    ),
    _rule(
        "template_bare",
        rf"@Template\[(?P<shape>{_FIELD})\|distance:(?P<distance>{_FIELD})\]",
        _template,
    ),
    _rule(
        "template_fields",
        r"@Template\[(?P<body>[^\[\]{}]*)\]" + _DISCARDED_LABEL,
        _template_fields,
    ),
)

CHECK_RULES = (
    _rule(
        "check_basic_traits",
        rf"@Check\[(?P<type>{_CHECK_TYPE})\|dc:(?P<dc>{_FIELD})\|basic"
        rf"\|(?:[^\[\]{{}}]*\|)?traits:[^\[\]{{}}]*\]" + _DISCARDED_LABEL,
        _check_basic,
    ),
    _rule(
        "check_traits",
        rf"@Check\[(?P<type>{_CHECK_TYPE})\|dc:(?P<dc>{_FIELD})"
        rf"\|traits:(?P<traits>[^\[\]{{}}|]*)\]" + _DISCARDED_LABEL,
        _check_traits,
    ),
    _rule(
        "check_show_dc",
        rf"@Check\[(?P<type>{_CHECK_TYPE})\|showDC:all\|dc:(?P<dc>{_FIELD})\]" + _DISCARDED_LABEL,
        _check_show_dc,
    ),
    _rule(
        "check_basic",
        rf"@Check\[(?P<type>{_CHECK_TYPE})\|dc:(?P<dc>{_FIELD})\|basic\]" + _DISCARDED_LABEL,
        _check_basic,
    ),
    _rule(
        "check_bare",
        rf"@Check\[(?P<type>{_CHECK_TYPE})\|dc:(?P<dc>{_FIELD})\]" + _DISCARDED_LABEL,
        _check,
    ),
    _rule(
        "check_fields",
        r"@Check\[(?P<body>[^\[\]{}]*)\]" + _DISCARDED_LABEL,
        _check_fields,
    ),
)

REFERENCE_RULES = (
    _rule(
        "item_reference_labeled",
        r"@UUID\[Compendium\.(?P<pack>[^\[\]{}]+?)\.Item\.(?P<slug>[^\[\]{}]+)\]"
        r"\{(?P<label>[^{}]*)\}",
        _item_reference_labeled,
    ),
    _rule(
        "item_reference",
        r"@UUID\[Compendium\.(?P<pack>[^\[\]{}]+?)\.Item\.(?P<slug>[^\[\]{}]+)\]",
        _item_reference,
    ),
    _rule(
        "actor_reference",
        r"@UUID\[Compendium\.(?P<pack>[^\[\]{}]+?)\.Actor\.(?P<name>[^\[\]{}]+)\]"
        r"(?:\{(?P<label>[^{}]*)\})?",
        _actor_reference,
    ),
    _rule(
        "compendium_reference",
        r"@UUID\[Compendium\.(?P<path>[^\[\]{}]+)\](?:\{(?P<label>[^{}]*)\})?",
        _compendium_reference,
    ),
)

LOCALIZE_FALLBACK_RULE = _rule(
    "localize_fallback",
    r"@Localize\[(?P<path>[^\[\]{}]*)\](?:\{(?P<label>[^{}]*)\})?",
    _localize_fallback,
)

UNKNOWN_DIRECTIVE_RULE = _rule(
    "unknown_directive",
    r"@(?!Localize\[)(?P<word>\w+)\[(?P<body>[^\[\]]*)\](?:\{(?P<label>[^{}]*)\})?",
    _unknown_directive,
)


def build_rule_table(localize_fallback: bool = False) -> tuple[DirectiveRule, ...]:
    """
    Build the ordered rule table.

    Args:
        localize_fallback: Also reduce @Localize[...] placeholders to their
            attached text or last key segment. Off by default so that
            placeholders are left for the localizer.
    """
    rules = [*ROLL_RULES, *DAMAGE_RULES, *TEMPLATE_RULES, *CHECK_RULES, *REFERENCE_RULES]
    if localize_fallback:
        rules.append(LOCALIZE_FALLBACK_RULE)
    rules.append(UNKNOWN_DIRECTIVE_RULE)
    return tuple(rules)
