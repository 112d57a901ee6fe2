"""Time zone helpers: descriptors, abbreviations, sort keys and conversions."""

from .abbreviations import abbreviate
from .conversions import convert_between, convert_to_local, convert_to_utc, localize
from .descriptors import (
    UTC_ZONE_ID,
    ZoneDescriptor,
    describe_all_zones,
    describe_zone,
    display_time_zone,
    format_offset,
    list_zone_ids,
    load_zone,
    local_zone_id,
)
from .sort_keys import MAXIMUM_BIAS, generate_sort_key
from .transitions import Transition, find_transitions

__all__ = [
    "MAXIMUM_BIAS",
    "UTC_ZONE_ID",
    "Transition",
    "ZoneDescriptor",
    "abbreviate",
    "convert_between",
    "convert_to_local",
    "convert_to_utc",
    "describe_all_zones",
    "describe_zone",
    "display_time_zone",
    "find_transitions",
    "format_offset",
    "generate_sort_key",
    "list_zone_ids",
    "load_zone",
    "local_zone_id",
]
