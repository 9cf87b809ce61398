"""Counter formatting for numbered list markers."""

from __future__ import annotations

import string

_ROMAN_NUMERALS = (
    (1000, "M"),
    (900, "CM"),
    (500, "D"),
    (400, "CD"),
    (100, "C"),
    (90, "XC"),
    (50, "L"),
    (40, "XL"),
    (10, "X"),
    (9, "IX"),
    (5, "V"),
    (4, "IV"),
    (1, "I"),
)


def to_roman(value: int, lower: bool = False) -> str:
    """Convert an integer to Roman numerals.

    Args:
        value: Number to convert.
        lower: Return lower-case numerals when True.

    Returns:
        str: Roman numerals for values from 1 to 3999, otherwise the decimal
            representation of `value`.

    Examples:
        to_roman(14)  # "XIV"
        to_roman(3, lower=True)  # "iii"
    """
    if not 0 < value < 4000:
        return str(value)

    numerals = []
    remainder = value
    for amount, symbol in _ROMAN_NUMERALS:
        count, remainder = divmod(remainder, amount)
        numerals.append(symbol * count)

    result = "".join(numerals)
    return result.lower() if lower else result


def to_alpha(value: int) -> str:
    """Convert a positive integer to a lower-case letter counter.

    Counting continues past "z" with two letters, like spreadsheet columns.

    Examples:
        to_alpha(1)  # "a"
        to_alpha(27)  # "aa"
    """
    if value <= 0:
        return str(value)

    letters = []
    remainder = value
    while remainder:
        remainder, offset = divmod(remainder - 1, 26)
        letters.append(string.ascii_lowercase[offset])
    return "".join(reversed(letters))


def format_list_counter(depth: int, value: int) -> str:
    """Format an ordered list counter for a nesting depth.

    Depths cycle through decimal, alphabetic and Roman numbering.

    Examples:
        format_list_counter(0, 2)  # "2"
        format_list_counter(1, 2)  # "b"
        format_list_counter(2, 2)  # "ii"
    """
    style = depth % 3
    if style == 0:
        return str(value)
    if style == 1:
        return to_alpha(value)
    return to_roman(value, lower=True)
