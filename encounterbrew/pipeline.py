"""
Description Pipeline - Renders a raw compendium description for display.

Steps, in order:
1. Strip <hr /> dividers
2. Resolve @Localize[...] placeholders (when a localizer is given)
3. Rewrite the remaining directives, reducing placeholders the localizer
   could not resolve to their label or last key segment

The localizer and the rewriter never call each other; this module is the
only place they are composed.
"""

from __future__ import annotations
from typing import Any

from .formatting import strip_dividers
from .localization import Localizer, stringify
from .text_engine import DirectiveRewriter

_rewriter = DirectiveRewriter(localize_fallback=True)


def render_description(
    text: Any,
    localizer: Localizer | None = None,
    rewriter: DirectiveRewriter | None = None,
) -> str:
    """
    Render description text for display.

    Args:
        text: Raw description; non-string scalars are stringified
        localizer: Resolver for @Localize[...] placeholders
        rewriter: Rewriter to use instead of the shared default

    Returns:
        Display text with every recognized directive rewritten
    """
    if not isinstance(text, str):
        return stringify(text)

    text = strip_dividers(text)
    if localizer is not None:
        text = localizer.resolve(text)
    return (rewriter or _rewriter).rewrite(text)
