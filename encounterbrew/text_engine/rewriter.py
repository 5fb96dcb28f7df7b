"""
Directive Rewriter - Applies the rule table to description text.

The rewriter:
1. Runs every rule once, in table order
2. Replaces each match with the rule's transform output
3. Freezes produced text so no later rule can match inside it
4. Leaves malformed or nested directives exactly as written

rewrite() is total: any input string has a defined output.
"""

from __future__ import annotations
import logging
import re
from typing import Iterable, Sequence

from .rules import DirectiveRule, build_rule_table

logger = logging.getLogger(__name__)

# An @Word head together with its opening bracket.
_DIRECTIVE_OPEN = re.compile(r"@\w+\[")

# (text, frozen) pieces of the string being rewritten.
Segment = tuple[str, bool]


def _closing_bracket(text: str, start: int) -> int | None:
    """Index of the "]" matching the "[" at start, or None if it never closes."""
    depth = 0
    for index in range(start, len(text)):
        char = text[index]
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return index
    return None


def is_nested(text: str, position: int) -> bool:
    """
    Check whether position sits inside the brackets of another directive.

    A directive encloses position only when its head opens before position
    and its matching "]" comes after it. A head whose bracket never closes
    encloses nothing.
    """
    for head in _DIRECTIVE_OPEN.finditer(text, 0, position):
        close = _closing_bracket(text, head.end() - 1)
        if close is not None and close > position:
            return True
    return False


class DirectiveRewriter:
    """
    Rewrites compendium directives into display prose.

    Usage:
        rewriter = DirectiveRewriter()
        rewriter.rewrite("Make a @Check[reflex|dc:19|basic] save.")
        # -> "Make a DC 19 basic reflex save."

    The rule table is immutable after construction, so a single instance
    can be shared between threads.
    """

    def __init__(
        self,
        rules: Iterable[DirectiveRule] | None = None,
        localize_fallback: bool = False,
    ):
        if rules is None:
            rules = build_rule_table(localize_fallback=localize_fallback)
        self._rules = tuple(rules)

        names = [rule.name for rule in self._rules]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate rule names: {', '.join(duplicates)}")

    @property
    def rules(self) -> tuple[DirectiveRule, ...]:
        return self._rules

    @property
    def rule_names(self) -> list[str]:
        return [rule.name for rule in self._rules]

    def rewrite(self, text: str | None) -> str:
        """
        Rewrite every recognized directive in text.

        Text without directives comes back unchanged.
        """
        if not text:
            return ""

        segments: list[Segment] = [(text, False)]
        for rule in self._rules:
            segments = self._apply_rule(rule, segments)

        return "".join(piece for piece, _ in segments)

    def _apply_rule(self, rule: DirectiveRule, segments: Sequence[Segment]) -> list[Segment]:
        result: list[Segment] = []
        hits = 0

        for piece, frozen in segments:
            if frozen or not piece:
                result.append((piece, frozen))
                continue

            cursor = 0
            for match in rule.pattern.finditer(piece):
                if is_nested(piece, match.start()):
                    continue

                replacement = self._transform(rule, match)
                if replacement is None:
                    continue

                if match.start() > cursor:
                    result.append((piece[cursor:match.start()], False))
                result.append((replacement, True))
                cursor = match.end()
                hits += 1

            if cursor < len(piece):
                result.append((piece[cursor:], False))

        if hits:
            logger.debug("Rule %s rewrote %d directive(s)", rule.name, hits)
        return result

    def _transform(self, rule: DirectiveRule, match: re.Match[str]) -> str | None:
        try:
            return rule.transform(match)
        except Exception:
            logger.warning(
                "Rule %s failed on %r; keeping the directive as written",
                rule.name,
                match.group(0),
                exc_info=True,
            )
            return None
