"""
Text Engine - Rewrites compendium directives into display prose.

The engine is a fixed, ordered table of pattern rules:
1. Dice rolls ([[/r ...]], [[/br ...]]{...}, [[/gmr ...]]{...})
2. Damage (@Damage[...])
3. Area templates (@Template[...])
4. DC checks (@Check[...])
5. Cross-references (@UUID[...])
6. Fallback for unknown @Word[...] directives

Each rule runs once over the text; nothing a rule produces is matched again.
"""

from .rules import DirectiveRule, build_rule_table, humanize_slug, looks_like_id
from .rewriter import DirectiveRewriter, is_nested

__all__ = [
    "DirectiveRule",
    "DirectiveRewriter",
    "build_rule_table",
    "humanize_slug",
    "looks_like_id",
    "is_nested",
]
