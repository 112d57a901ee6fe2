"""The canned tasks run by the tzlab console program."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from tzlab.cases import ConversionCaseCollection
from tzlab.config import LabSettings
from tzlab.errors import MissingZoneId
from tzlab.reporting import ReportColumn, ReportColumnSet
from tzlab.zones import (
    UTC_ZONE_ID,
    describe_all_zones,
    describe_zone,
    find_transitions,
    load_zone,
    local_zone_id,
)

logger = logging.getLogger(__name__)


class Task(Enum):
    ALL = "All"
    ANY_TO_ANY = "AnyTimeZoneToAnyOtherTimeZone"
    ENUM_TIME_ZONES = "EnumTimeZones"
    ANY_TO_UTC = "AnyTimeZoneToUTC"
    ANY_TO_LOCAL = "AnyTimeZoneToLocalTime"
    ENUM_ADJUSTMENTS = "EnumerateTimeZoneAdjustments"
    SHOW_TIME_ZONE = "ShowTimeZone"

    @classmethod
    def parse(cls, text: str) -> "Task":
        """Look up a task by name, ignoring case."""

        for task in cls:
            if task.value.lower() == text.strip().lower():
                return task
        raise ValueError(f"The specified task, {text}, is invalid.")


TASK_LABELS = {
    Task.ANY_TO_ANY: "Converting the edge cases between two time zones",
    Task.ENUM_TIME_ZONES: "Enumerating the installed time zones",
    Task.ANY_TO_UTC: "Converting the edge cases to UTC",
    Task.ANY_TO_LOCAL: "Converting the edge cases to local time",
    Task.ENUM_ADJUSTMENTS: "Enumerating time zone adjustments",
    Task.SHOW_TIME_ZONE: "Showing time zone properties",
}

ZONE_COLUMNS: List[Tuple[str, str]] = [
    ("sort_key", "SortKey"),
    ("zone_id", "Id"),
    ("display_name", "DisplayName"),
    ("display_base_utc_offset", "BaseUtcOffset"),
    ("standard_name", "StandardName"),
    ("standard_abbreviation", "StandardAbbreviation"),
    ("daylight_name", "DaylightName"),
    ("daylight_abbreviation", "DaylightAbbreviation"),
    ("supports_dst", "SupportsDst"),
]

TRANSITION_COLUMNS: List[Tuple[str, str]] = [
    ("display_number", "Number"),
    ("display_utc_instant", "UtcInstant"),
    ("display_local_before", "LocalBefore"),
    ("display_local_after", "LocalAfter"),
    ("display_offset", "Offset"),
    ("display_delta", "Delta"),
    ("is_dst", "IsDst"),
    ("abbreviation", "Abbreviation"),
]


@dataclass
class TaskContext:
    """Everything a task needs from the command line and the settings file."""

    settings: LabSettings
    zone_id: Optional[str] = None
    from_year: Optional[int] = None
    to_year: Optional[int] = None
    verbose: bool = True

    def announce(self, message: str) -> None:
        if self.verbose:
            print(message)


def build_report(
    columns: Sequence[Tuple[str, str]],
    output_file: Optional[Path] = None,
    encoding: str = "utf-8",
) -> ReportColumnSet:
    report = ReportColumnSet(output_file=output_file, encoding=encoding)
    for position, (field_name, label) in enumerate(columns):
        report.add_column(ReportColumn(position, field_name, label))
    return report


def enumerate_time_zones(ctx: TaskContext) -> None:
    descriptors = describe_all_zones()
    count = build_report(ZONE_COLUMNS).write_report(descriptors)
    logger.info("Reported %d time zones", count)


def _convert_edge_cases(ctx: TaskContext, to_zone: str, output_file: Optional[Path] = None) -> None:
    settings = ctx.settings
    collection = ConversionCaseCollection.from_file(
        settings.edge_case_input_file, settings.source_zone, to_zone
    )
    converted = collection.convert_all()
    logger.info(
        "Converted %d of %d edge cases from %s to %s",
        converted,
        len(collection),
        settings.source_zone,
        to_zone,
    )
    collection.create_report(output_file, settings.report_encoding)


def convert_any_time_zone_to_utc(ctx: TaskContext) -> None:
    _convert_edge_cases(ctx, UTC_ZONE_ID)


def convert_any_time_zone_to_local_time(ctx: TaskContext) -> None:
    _convert_edge_cases(ctx, local_zone_id())


def convert_between_any_two_time_zones(ctx: TaskContext) -> None:
    settings = ctx.settings
    _convert_edge_cases(ctx, settings.target_zone, settings.edge_case_report_file)
    if settings.edge_case_report_file:
        ctx.announce(f"Report written to {settings.edge_case_report_file}")


def enumerate_time_zone_adjustments(ctx: TaskContext, zone_id: Optional[str]) -> None:
    if not zone_id:
        raise MissingZoneId("Enumerating time zone adjustments requires a time zone id.")
    load_zone(zone_id)
    from_year = ctx.from_year or datetime.now().year
    to_year = ctx.to_year or from_year
    ctx.announce(f"Selected time zone = {zone_id}, years {from_year} through {to_year}\n")
    transitions = find_transitions(zone_id, from_year, to_year)
    if not transitions:
        ctx.announce(f"{zone_id} has no offset transitions in that period.")
        return
    build_report(TRANSITION_COLUMNS).write_report(transitions)


def show_time_zone(ctx: TaskContext, zone_id: Optional[str]) -> None:
    descriptor = describe_zone(zone_id or local_zone_id())
    properties = [
        {"Property": "Id", "Value": descriptor.zone_id},
        {"Property": "DisplayName", "Value": descriptor.display_name},
        {"Property": "StandardName", "Value": descriptor.standard_name},
        {"Property": "DaylightName", "Value": descriptor.daylight_name},
        {"Property": "BaseUtcOffset", "Value": descriptor.display_base_utc_offset},
        {"Property": "SupportsDst", "Value": descriptor.supports_dst},
    ]
    ReportColumnSet(["Property", "Value"]).write_report(properties)


TASK_RUNNERS: Dict[Task, Callable[[TaskContext], None]] = {
    Task.ENUM_TIME_ZONES: enumerate_time_zones,
    Task.ANY_TO_ANY: convert_between_any_two_time_zones,
    Task.ANY_TO_UTC: convert_any_time_zone_to_utc,
    Task.ANY_TO_LOCAL: convert_any_time_zone_to_local_time,
    Task.ENUM_ADJUSTMENTS: lambda ctx: enumerate_time_zone_adjustments(ctx, ctx.zone_id),
    Task.SHOW_TIME_ZONE: lambda ctx: show_time_zone(ctx, ctx.zone_id),
}

ALL_TASKS = [
    Task.ENUM_TIME_ZONES,
    Task.ANY_TO_ANY,
    Task.ANY_TO_UTC,
    Task.ANY_TO_LOCAL,
    Task.ENUM_ADJUSTMENTS,
]


def _run_one(task: Task, ctx: TaskContext) -> None:
    label = TASK_LABELS[task]
    ctx.announce(f"\n{label} begin:\n")
    TASK_RUNNERS[task](ctx)
    ctx.announce(f"\n{label} done.\n")


def run_task(task: Task, ctx: TaskContext) -> None:
    if task is Task.ALL:
        # Run as part of every task, the adjustments report covers the local zone.
        if not ctx.zone_id:
            ctx.zone_id = local_zone_id()
        for each in ALL_TASKS:
            _run_one(each, ctx)
        return
    _run_one(task, ctx)
