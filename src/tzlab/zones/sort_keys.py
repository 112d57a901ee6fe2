"""Sort keys that order time zones from west to east."""

from __future__ import annotations

MAXIMUM_BIAS = 720  # minutes in 12 hours
WEST_OF_ZULU = "N"
EAST_OF_ZULU = "P"


def generate_sort_key(offset_minutes: int, identifier: str) -> str:
    """Return a key whose string order is the west-to-east order of offsets.

    Zones west of UTC get ``N`` plus the distance from the date line, so the
    furthest west sorts first; the rest get ``P`` plus the offset itself.
    Zones with equal offsets sort by ``identifier``.

    >>> generate_sort_key(-480, "America/Los_Angeles")
    'N240America/Los_Angeles'
    >>> generate_sort_key(60, "Europe/Paris")
    'P060Europe/Paris'
    """

    offset_minutes = int(offset_minutes)
    if offset_minutes < -MAXIMUM_BIAS or offset_minutes > 999:
        raise ValueError(
            f"Offset {offset_minutes} minutes cannot be encoded in a three digit sort key."
        )
    if offset_minutes < 0:
        return f"{WEST_OF_ZULU}{MAXIMUM_BIAS - abs(offset_minutes):03d}{identifier}"
    return f"{EAST_OF_ZULU}{offset_minutes:03d}{identifier}"
