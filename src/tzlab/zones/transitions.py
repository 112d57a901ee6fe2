"""Locate the UTC offset transitions (DST adjustments) of a time zone."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

from .descriptors import format_offset, load_zone

SCAN_STEP_SECONDS = 24 * 3600
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"
ZERO = timedelta(0)


@dataclass(frozen=True)
class Transition:
    number: int
    utc_instant: datetime
    offset_before: timedelta
    offset_after: timedelta
    is_dst: bool
    abbreviation: str

    @property
    def local_before(self) -> datetime:
        return self.utc_instant + self.offset_before

    @property
    def local_after(self) -> datetime:
        return self.utc_instant + self.offset_after

    @property
    def delta(self) -> timedelta:
        return self.offset_after - self.offset_before

    @property
    def display_number(self) -> str:
        return str(self.number)

    @property
    def display_utc_instant(self) -> str:
        return self.utc_instant.strftime(DATE_FORMAT)

    @property
    def display_local_before(self) -> str:
        return self.local_before.strftime(DATE_FORMAT)

    @property
    def display_local_after(self) -> str:
        return self.local_after.strftime(DATE_FORMAT)

    @property
    def display_offset(self) -> str:
        return format_offset(self.offset_after)

    @property
    def display_delta(self) -> str:
        return format_offset(self.delta)


def _state(zone, ts: int) -> Tuple[Optional[timedelta], Optional[timedelta], Optional[str]]:
    moment = datetime.fromtimestamp(ts, tz=zone)
    return moment.utcoffset(), moment.dst(), moment.tzname()


def _enters_daylight(dst_before: Optional[timedelta], dst_after: Optional[timedelta]) -> bool:
    # Leaving a negative DST component (Europe/Dublin in spring) also enters summer time.
    return (dst_after or ZERO) > min(dst_before or ZERO, ZERO)


def find_transitions(zone_id: str, from_year: int, to_year: Optional[int] = None) -> List[Transition]:
    """Return every offset or name change of ``zone_id`` between two years (inclusive).

    The zone is sampled once a day; each change found is narrowed down to
    the second by bisection.
    """

    to_year = from_year if to_year is None else to_year
    if to_year < from_year:
        raise ValueError(f"to_year ({to_year}) must not precede from_year ({from_year})")
    zone = load_zone(zone_id)
    start = int(datetime(from_year, 1, 1, tzinfo=timezone.utc).timestamp())
    end = int(datetime(to_year + 1, 1, 1, tzinfo=timezone.utc).timestamp())

    transitions: List[Transition] = []
    lo = start
    lo_state = _state(zone, lo)
    while lo < end:
        hi = min(lo + SCAN_STEP_SECONDS, end)
        hi_state = _state(zone, hi)
        if hi_state != lo_state:
            before = lo_state
            while hi - lo > 1:
                mid = (lo + hi) // 2
                if _state(zone, mid) == before:
                    lo = mid
                else:
                    hi = mid
            offset_after, dst_after, name_after = hi_state = _state(zone, hi)
            transitions.append(
                Transition(
                    number=len(transitions) + 1,
                    utc_instant=datetime.fromtimestamp(hi, tz=timezone.utc).replace(tzinfo=None),
                    offset_before=before[0],
                    offset_after=offset_after,
                    is_dst=_enters_daylight(before[1], dst_after),
                    abbreviation=name_after or "",
                )
            )
        lo, lo_state = hi, hi_state
    return transitions
