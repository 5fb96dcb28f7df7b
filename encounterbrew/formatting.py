"""
Formatting helpers shared by the description renderer and stat blocks.

Small string utilities:
- Ordinal levels: 1st, 2nd, 3rd, 11th
- Signed modifiers: +5, -3, 0
- Divider stripping for compendium HTML
- Flat-modifier arithmetic on dice expressions
"""

from __future__ import annotations

DIVIDER_TAG = "<hr />"


def format_ordinal(level: int | str) -> int | str:
    """
    Format a positive level as an English ordinal.

    Only ints and plain digit strings count as levels. Anything else
    (zero, negatives, floats, padded or non-numeric text) is returned
    unchanged.

    Examples:
        format_ordinal(1)     -> "1st"
        format_ordinal("12")  -> "12th"
        format_ordinal("cantrip") -> "cantrip"
        format_ordinal(" 12") -> " 12"
    """
    if isinstance(level, bool):
        return level
    if isinstance(level, int):
        n = level
    elif isinstance(level, str) and level.lstrip("+-").isdigit():
        try:
            n = int(level)
        except ValueError:
            return level
    else:
        return level

    if n <= 0:
        return level

    if 11 <= n % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def signed(value: int) -> str:
    """Format a modifier with an explicit sign; zero stays unsigned."""
    if value > 0:
        return f"+{value}"
    return str(value)


def strip_dividers(html: str) -> str:
    """Remove horizontal-rule dividers, leaving all other markup alone."""
    return html.replace(DIVIDER_TAG, "")


def remove_trailing_comma(text: str) -> str:
    """
    Drop the trailing separator left behind when joining a list by hand.

    "fire, cold, " -> "fire, cold"
    """
    if len(text) >= 2 and text[-2] == ",":
        return text[:-2]
    return text


def capitalize_first(text: str) -> str:
    """Upper-case the first character only."""
    return text[:1].upper() + text[1:]


def modify_damage(damage: str, modifier: int) -> str:
    """
    Apply a flat modifier to a dice expression.

    The existing modifier (if any) and the delta are combined; a net zero
    drops the modifier term. Expressions that do not contain exactly one
    "d" are returned unchanged.

    Examples:
        modify_damage("1d6", 3)    -> "1d6+3"
        modify_damage("2d8-3", 2)  -> "2d8-1"
        modify_damage("3d6+5", -5) -> "3d6"
    """
    parts = damage.split("d")
    if len(parts) != 2:
        return damage

    count, rest = parts
    die, sign, existing = rest.partition("+")
    if not sign:
        die, sign, existing = rest.partition("-")

    current = _to_int(existing) if sign else 0
    if sign == "-":
        current = -current

    total = current + modifier
    expression = f"{count}d{die}"
    if total:
        expression += signed(total)
    return expression


def _to_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0
