"""Exception types raised by the report engine and the time-zone helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from tzlab.reporting.column_set import ReportStage


class TzLabError(Exception):
    """Base class for every error raised by tzlab."""


class InvalidArgument(TzLabError, ValueError):
    """A column position is negative or a required string is empty."""


class TypeMismatch(TzLabError, TypeError):
    """A comparison received an object of an incompatible type."""

    def __init__(self, this_type: type, other_type: type) -> None:
        self.this_type = this_type
        self.other_type = other_type
        super().__init__(
            "Both objects must be of the same type. "
            f"Type of THIS object = {this_type.__qualname__}, "
            f"type of OTHER object = {other_type.__qualname__}"
        )


class ReportIOFailure(TzLabError):
    """Opening, writing or closing a report sink failed.

    ``fault`` is the class name of the underlying exception, which is also
    chained as ``__cause__``.
    """

    def __init__(self, fault: str, stage: "ReportStage", file_name: Optional[str]) -> None:
        self.fault = fault
        self.stage = stage
        self.file_name = file_name
        super().__init__(
            f"An {fault} exception occurred while {stage.value} on file {file_name}. "
            "See the chained exception for additional details."
        )


class ZoneNotFound(TzLabError, LookupError):
    """The time zone id is empty or not installed on this system."""

    def __init__(self, zone_id: Optional[str]) -> None:
        self.zone_id = zone_id
        super().__init__(f"Time zone '{zone_id}' is not registered on this computer.")


class MissingZoneId(TzLabError):
    """A task that needs a time zone id was run without one."""


class NonexistentLocalTime(TzLabError, ValueError):
    """A wall time falls inside a daylight saving gap of its zone."""

    def __init__(self, moment, zone_id: str) -> None:
        self.moment = moment
        self.zone_id = zone_id
        super().__init__(f"{moment} does not exist in time zone '{zone_id}'.")


class EdgeCaseFileNameMissing(TzLabError):
    """The settings name no edge-case input file."""


class EdgeCaseFileNotFound(TzLabError, FileNotFoundError):
    """The edge-case input file does not exist."""


class EdgeCaseFileInvalid(TzLabError, ValueError):
    """The edge-case input file is empty, mislabelled or holds a bad record."""
