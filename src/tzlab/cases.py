"""Edge-case conversion cases read from a tab-separated file."""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union

import pandas as pd

from tzlab.errors import (
    EdgeCaseFileInvalid,
    EdgeCaseFileNameMissing,
    EdgeCaseFileNotFound,
    NonexistentLocalTime,
)
from tzlab.reporting import ReportColumnSet
from tzlab.zones import convert_between, display_time_zone

logger = logging.getLogger(__name__)

LABEL_ROW = ["TestDate", "Comment"]
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"

CASE_REPORT_FIELDS = [
    "display_case_number",
    "comment",
    "display_test_date",
    "display_test_date_time_zone",
    "display_output_date",
    "display_output_date_time_zone",
]
CASE_LABEL_PREFIX = "display_"


def format_date(moment: Optional[datetime]) -> str:
    return moment.strftime(DATE_FORMAT) if moment is not None else ""


def read_edge_cases(path: Union[str, Path, None]) -> List[Tuple[int, datetime, str]]:
    """Read ``(case_number, test_date, comment)`` tuples from an edge-case file.

    The first line must be the label row ``TestDate<TAB>Comment``; every
    following line holds exactly two fields. Case numbers are the 1-based
    record numbers after the label row.
    """

    if path is None or str(path) == "":
        raise EdgeCaseFileNameMissing("No edge-case input file is configured.")
    path = Path(path)
    if not path.is_file():
        raise EdgeCaseFileNotFound(f"The edge-case file cannot be found. File name = {path}")
    try:
        frame = pd.read_csv(
            path,
            sep="\t",
            dtype=str,
            keep_default_na=False,
            quoting=csv.QUOTE_NONE,
        )
    except pd.errors.EmptyDataError as exc:
        raise EdgeCaseFileInvalid(
            f"The edge-case file is empty or missing the label row. File name = {path}"
        ) from exc
    except pd.errors.ParserError as exc:
        raise EdgeCaseFileInvalid(
            f"The edge-case file contains a record with too many fields. File name = {path}: {exc}"
        ) from exc

    if list(frame.columns) != LABEL_ROW:
        raise EdgeCaseFileInvalid(
            f"The edge-case file is missing the required label row. File name = {path}"
        )
    if frame.empty:
        raise EdgeCaseFileInvalid(f"The edge-case file holds no records. File name = {path}")

    frame = frame.fillna("")
    cases = []
    for case_number, row in enumerate(frame.itertuples(index=False), start=1):
        raw = "\t".join([row.TestDate, row.Comment])
        if not row.TestDate or not row.Comment:
            raise EdgeCaseFileInvalid(
                "The edge-case file contains a bad record: "
                f"file name = {path}, record number = {case_number}, "
                f"record contents = {raw!r}, expected field count = {len(LABEL_ROW)}"
            )
        try:
            test_date = pd.to_datetime(row.TestDate).to_pydatetime()
        except (ValueError, OverflowError) as exc:
            raise EdgeCaseFileInvalid(
                f"Cannot parse test date {row.TestDate!r} in record {case_number} of {path}"
            ) from exc
        cases.append((case_number, test_date, row.Comment))
    return cases


@dataclass(order=True)
class ConversionCase:
    """One test date to convert from ``from_zone`` to ``to_zone``."""

    case_number: int
    test_date: datetime = field(compare=False)
    comment: str = field(compare=False)
    from_zone: str = field(compare=False)
    to_zone: str = field(compare=False)
    output_date: Optional[datetime] = field(default=None, compare=False)

    @property
    def display_case_number(self) -> str:
        return str(self.case_number)

    @property
    def display_test_date(self) -> str:
        return format_date(self.test_date)

    @property
    def display_test_date_time_zone(self) -> str:
        return display_time_zone(self.test_date, self.from_zone)

    @property
    def display_output_date(self) -> str:
        return format_date(self.output_date)

    @property
    def display_output_date_time_zone(self) -> str:
        return display_time_zone(self.output_date, self.to_zone)


Converter = Callable[[datetime, str, str], datetime]


class ConversionCaseCollection:
    """Conversion cases sharing a source and a target zone."""

    def __init__(self, cases: Sequence[ConversionCase], from_zone: str, to_zone: str) -> None:
        self.from_zone = from_zone
        self.to_zone = to_zone
        self._cases: List[ConversionCase] = sorted(cases)

    @classmethod
    def from_file(cls, path: Union[str, Path, None], from_zone: str, to_zone: str) -> "ConversionCaseCollection":
        cases = [
            ConversionCase(number, test_date, comment, from_zone, to_zone)
            for number, test_date, comment in read_edge_cases(path)
        ]
        return cls(cases, from_zone, to_zone)

    def __iter__(self) -> Iterator[ConversionCase]:
        return iter(self._cases)

    def __len__(self) -> int:
        return len(self._cases)

    def __getitem__(self, index: int) -> ConversionCase:
        return self._cases[index]

    def convert_all(self, converter: Converter = convert_between) -> int:
        """Convert every case; cases that cannot be converted are logged and skipped.

        Returns the number of cases converted.
        """

        converted = 0
        for case in self._cases:
            try:
                case.output_date = converter(case.test_date, case.from_zone, case.to_zone)
                converted += 1
            except (NonexistentLocalTime, OverflowError) as exc:
                case.output_date = None
                logger.warning(
                    "Raw test date %s of case %d skipped: %s",
                    case.display_test_date,
                    case.case_number,
                    exc,
                )
        return converted

    def report_columns(self, output_file: Union[str, Path, None] = None, encoding: str = "utf-8") -> ReportColumnSet:
        return ReportColumnSet(
            CASE_REPORT_FIELDS,
            output_file,
            strip_text=CASE_LABEL_PREFIX,
            encoding=encoding,
        )

    def create_report(self, output_file: Union[str, Path, None] = None, encoding: str = "utf-8") -> int:
        """Write the case report to ``output_file`` (standard output when None)."""

        return self.report_columns(output_file, encoding).write_report(self._cases)
