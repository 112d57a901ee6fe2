"""Convert wall-clock times between time zones."""

from __future__ import annotations

from datetime import datetime, timezone

from tzlab.errors import NonexistentLocalTime

from .descriptors import UTC_ZONE_ID, load_zone, local_zone_id


def localize(moment: datetime, zone_id: str) -> datetime:
    """Attach ``zone_id`` to a naive wall time, rejecting times in a DST gap."""

    zone = load_zone(zone_id)
    if moment.tzinfo is not None:
        return moment.astimezone(zone)
    aware = moment.replace(tzinfo=zone)
    # A wall time inside a gap does not survive the round trip through UTC.
    if aware.astimezone(timezone.utc).astimezone(zone).replace(tzinfo=None) != moment:
        raise NonexistentLocalTime(moment, zone_id)
    return aware


def convert_between(moment: datetime, from_zone: str, to_zone: str) -> datetime:
    """Convert a wall time in ``from_zone`` to the naive wall time in ``to_zone``."""

    target = load_zone(to_zone)
    return localize(moment, from_zone).astimezone(target).replace(tzinfo=None)


def convert_to_utc(moment: datetime, from_zone: str) -> datetime:
    return convert_between(moment, from_zone, UTC_ZONE_ID)


def convert_to_local(moment: datetime, from_zone: str) -> datetime:
    return convert_between(moment, from_zone, local_zone_id())
