"""Abbreviate human-readable time zone names."""

from __future__ import annotations

SIGNS = ("+", "-")


def abbreviate(name: str) -> str:
    """Abbreviate a time zone name to the initials of its words.

    Parenthesised region qualifiers keep their parentheses and the region's
    initial, and everything from a ``+`` or ``-`` sign onward is copied as is.

    >>> abbreviate("Pacific Standard Time")
    'PST'
    >>> abbreviate("Mexico (Central)")
    'M(C)'
    >>> abbreviate("UTC-05:30")
    'U-05:30'
    """

    out = []
    at_word_start = True
    take_rest = False
    for char in name:
        if take_rest:
            out.append(char)
        elif char == " ":
            at_word_start = True
        elif at_word_start:
            out.append(char)
            # The letter after "(" starts the region name.
            at_word_start = char == "("
            if char in SIGNS:
                take_rest = True
        elif char == ")":
            out.append(char)
        elif char in SIGNS:
            out.append(char)
            take_rest = True
    return "".join(out)
