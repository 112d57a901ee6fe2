"""Fixed-width report writer built from an ordered set of report columns."""

from __future__ import annotations

import bisect
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Optional, Sequence, TextIO, Tuple, Union

from tzlab.errors import InvalidArgument, ReportIOFailure

from .columns import ReportColumn

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = " "
FILE_BUFSIZE = 8 * 1024
DEFAULT_STRIP_TEXT = "Display"
DEFAULT_ENCODING = "utf-8"


class LabelRule(Enum):
    REMOVE_FROM_BEGINNING = "remove_from_beginning"
    REMOVE_FROM_END = "remove_from_end"


class ReportStage(Enum):
    IDLE = "idle"
    OPENING = "opening"
    WRITING_HEADER = "writing the label row"
    WRITING_GUIDE = "writing the guide row"
    WRITING_DETAIL = "writing detail rows"
    CLOSING = "closing"
    ABORTED = "aborting"


def derive_label(
    field_name: str,
    strip_text: str = DEFAULT_STRIP_TEXT,
    rule: LabelRule = LabelRule.REMOVE_FROM_BEGINNING,
) -> str:
    """Derive a column label from a field name by removing fixed text.

    >>> derive_label("DisplayTestDate")
    'TestDate'
    >>> derive_label("case_number_text", "_text", LabelRule.REMOVE_FROM_END)
    'case_number'
    """

    if not strip_text:
        return field_name
    if rule is LabelRule.REMOVE_FROM_BEGINNING and field_name.startswith(strip_text):
        return field_name[len(strip_text):]
    if rule is LabelRule.REMOVE_FROM_END and field_name.endswith(strip_text):
        return field_name[: -len(strip_text)]
    return field_name


class ReportColumnSet:
    """Ordered report columns plus the sink their rows are written to.

    Callers make one pass over the records with :meth:`update_column_widths`,
    then emit :meth:`create_report_heading`, one :meth:`create_report_record`
    per record, and finally :meth:`close_report`. Rows go to standard output
    unless an output file name was given.
    """

    def __init__(
        self,
        field_names: Optional[Sequence[str]] = None,
        output_file: Union[str, Path, None] = None,
        *,
        strip_text: str = DEFAULT_STRIP_TEXT,
        rule: LabelRule = LabelRule.REMOVE_FROM_BEGINNING,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        self._columns: List[ReportColumn] = []
        self.output_file: Optional[str] = str(output_file) if output_file else None
        self.encoding = encoding
        self._stage = ReportStage.IDLE
        self._sink: Optional[TextIO] = None
        if field_names:
            self._load_field_names(field_names, strip_text, rule)

    def _load_field_names(self, field_names: Sequence[str], strip_text: str, rule: LabelRule) -> None:
        for position, name in enumerate(field_names):
            self._columns.append(ReportColumn(position, name, derive_label(name, strip_text, rule)))
        self._columns.sort()

    @property
    def columns(self) -> Tuple[ReportColumn, ...]:
        return tuple(self._columns)

    @property
    def stage(self) -> ReportStage:
        return self._stage

    @property
    def is_open(self) -> bool:
        return self._sink is not None

    def __len__(self) -> int:
        return len(self._columns)

    def __iter__(self) -> Iterator[ReportColumn]:
        return iter(self._columns)

    def add_column(self, column: ReportColumn) -> None:
        if any(existing.position == column.position for existing in self._columns):
            raise InvalidArgument(
                f"Column position {column.position} is already taken in this report."
            )
        bisect.insort(self._columns, column)

    def update_column_widths(self, record: Any) -> None:
        for column in self._columns:
            column.update_width_from_record(record)

    def label_row(self) -> str:
        return FIELD_SEPARATOR.join(column.render_label() for column in self._columns)

    def guide_row(self, guide_char: Optional[str] = None) -> str:
        return FIELD_SEPARATOR.join(column.render_guide(guide_char) for column in self._columns)

    def detail_row(self, record: Any) -> str:
        return FIELD_SEPARATOR.join(column.render_value(record) for column in self._columns)

    def create_report_heading(self, guide_char: Optional[str] = None) -> None:
        label_row = self.label_row()
        guide_row = self.guide_row(guide_char)
        if not self.output_file:
            print(label_row)
            print(guide_row)
            return
        # A repeated heading closes the previous writer before opening a new one.
        self.close_report()
        try:
            self._stage = ReportStage.OPENING
            self._sink = open(
                self.output_file, "w", encoding=self.encoding, buffering=FILE_BUFSIZE
            )
            self._stage = ReportStage.WRITING_HEADER
            self._sink.write(label_row + "\n")
            self._stage = ReportStage.WRITING_GUIDE
            self._sink.write(guide_row + "\n")
            self._stage = ReportStage.WRITING_DETAIL
        except (OSError, UnicodeError) as exc:
            raise self._abort(exc) from exc

    def create_report_record(self, record: Any, guide_char: Optional[str] = None) -> None:
        # guide_char is accepted for symmetry with create_report_heading; detail
        # rows carry no guide.
        row = self.detail_row(record)
        if self._sink is None:
            print(row)
            return
        try:
            self._stage = ReportStage.WRITING_DETAIL
            self._sink.write(row + "\n")
        except (OSError, UnicodeError) as exc:
            raise self._abort(exc) from exc

    def close_report(self) -> None:
        if self._sink is None:
            return
        try:
            self._stage = ReportStage.CLOSING
            self._sink.close()
            self._sink = None
            self._stage = ReportStage.IDLE
        except (OSError, UnicodeError) as exc:
            raise self._abort(exc) from exc
        finally:
            if self._stage is ReportStage.ABORTED:
                self._release_sink()

    def write_report(self, records: Iterable[Any], guide_char: Optional[str] = None) -> int:
        """Run both passes over ``records`` and close the sink; return the row count."""

        rows = list(records)
        for record in rows:
            self.update_column_widths(record)
        with self:
            self.create_report_heading(guide_char)
            for record in rows:
                self.create_report_record(record)
        return len(rows)

    def _abort(self, exc: BaseException) -> ReportIOFailure:
        failure = ReportIOFailure(type(exc).__name__, self._stage, self.output_file)
        self._stage = ReportStage.ABORTED
        self._release_sink()
        return failure

    def _release_sink(self) -> None:
        sink, self._sink = self._sink, None
        if sink is None:
            return
        try:
            sink.close()
        except (OSError, UnicodeError) as exc:
            logger.warning("Forced close of report file %s failed: %s", self.output_file, exc)

    def __enter__(self) -> "ReportColumnSet":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close_report()
        else:
            self._release_sink()

    def __repr__(self) -> str:
        labels = ", ".join(column.label for column in self._columns)
        return f"ReportColumnSet([{labels}], output_file={self.output_file!r}, stage={self._stage.name})"
