"""Properties of the time zones installed on this system."""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

from tzlocal import get_localzone_name
from tzlocal.windows_tz import tz_win

from tzlab.errors import ZoneNotFound

from .abbreviations import abbreviate
from .sort_keys import generate_sort_key

logger = logging.getLogger(__name__)

UTC_ZONE_ID = "UTC"


def load_zone(zone_id: Optional[str]) -> ZoneInfo:
    if not zone_id:
        raise ZoneNotFound(zone_id)
    try:
        return ZoneInfo(zone_id)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise ZoneNotFound(zone_id) from exc


def local_zone_id() -> str:
    return get_localzone_name() or UTC_ZONE_ID


def list_zone_ids() -> List[str]:
    return sorted(available_timezones())


def format_offset(offset: timedelta, *, seconds: bool = False, plus_sign: bool = True) -> str:
    """Format a UTC offset as ``+HH:MM`` (or ``HH:MM:SS`` like a .NET TimeSpan)."""

    total = int(offset.total_seconds())
    sign = "-" if total < 0 else ("+" if plus_sign else "")
    hours, rem = divmod(abs(total), 3600)
    minutes, secs = divmod(rem, 60)
    text = f"{sign}{hours:02d}:{minutes:02d}"
    if seconds:
        text += f":{secs:02d}"
    return text


@dataclass(frozen=True)
class ZoneDescriptor:
    """What the platform knows about one time zone."""

    zone_id: str
    base_utc_offset: timedelta
    supports_dst: bool
    standard_name: str
    daylight_name: str

    @property
    def base_offset_minutes(self) -> int:
        return int(self.base_utc_offset.total_seconds() // 60)

    @property
    def display_name(self) -> str:
        return f"(UTC{format_offset(self.base_utc_offset)}) {self.zone_id}"

    @property
    def display_base_utc_offset(self) -> str:
        return format_offset(self.base_utc_offset, seconds=True, plus_sign=False)

    @property
    def sort_key(self) -> str:
        return generate_sort_key(self.base_offset_minutes, self.zone_id)

    @property
    def display_abbreviation(self) -> str:
        return abbreviate(self.display_name)

    @property
    def standard_abbreviation(self) -> str:
        return abbreviate(self.standard_name)

    @property
    def daylight_abbreviation(self) -> str:
        return abbreviate(self.daylight_name)


@functools.lru_cache(maxsize=None)
def describe_zone(zone_id: str, year: Optional[int] = None) -> ZoneDescriptor:
    """Describe ``zone_id`` as observed in ``year`` (default: this year).

    Noon on 1 January and 1 July are sampled. The sample with the smaller
    UTC offset is standard time and gives the base offset; the zone observes
    daylight saving time when the two offsets differ. A negative DST
    component, as Europe/Dublin records for winter, does not move the base.
    """

    zone = load_zone(zone_id)
    year = year or datetime.now().year
    samples = [datetime(year, 1, 1, 12, tzinfo=zone), datetime(year, 7, 1, 12, tzinfo=zone)]
    std_sample, dst_sample = sorted(samples, key=lambda s: s.utcoffset())
    supports_dst = dst_sample.utcoffset() != std_sample.utcoffset()
    base = std_sample.utcoffset()

    windows_name = tz_win.get(zone_id)
    if windows_name:
        standard_name = windows_name
        daylight_name = windows_name.replace("Standard", "Daylight") if supports_dst else windows_name
    else:
        standard_name = std_sample.tzname() or zone_id
        daylight_name = (dst_sample.tzname() or standard_name) if supports_dst else standard_name

    return ZoneDescriptor(
        zone_id=zone_id,
        base_utc_offset=base,
        supports_dst=supports_dst,
        standard_name=standard_name,
        daylight_name=daylight_name,
    )


def describe_all_zones(year: Optional[int] = None) -> List[ZoneDescriptor]:
    """Describe every installed zone, ordered west to east by sort key."""

    descriptors = []
    for zone_id in list_zone_ids():
        try:
            descriptors.append(describe_zone(zone_id, year))
        except ZoneNotFound as exc:
            logger.warning("Skipping unreadable time zone %s: %s", zone_id, exc.__cause__)
    descriptors.sort(key=lambda d: d.sort_key)
    return descriptors


def display_time_zone(moment: Optional[datetime], zone_id: Optional[str]) -> str:
    """Name of ``zone_id`` in effect at ``moment``: daylight name during DST."""

    if moment is None or not zone_id or moment in (datetime.min, datetime.max):
        return ""
    zone = load_zone(zone_id)
    descriptor = describe_zone(zone_id, moment.year)
    local = moment.replace(tzinfo=zone) if moment.tzinfo is None else moment.astimezone(zone)
    in_daylight = descriptor.supports_dst and local.utcoffset() > descriptor.base_utc_offset
    return descriptor.daylight_name if in_daylight else descriptor.standard_name
