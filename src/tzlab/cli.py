"""Command-line interface for the time zone lab."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

from tzlab import __version__
from tzlab.config import load_settings
from tzlab.errors import (
    EdgeCaseFileInvalid,
    EdgeCaseFileNameMissing,
    EdgeCaseFileNotFound,
    MissingZoneId,
    ReportIOFailure,
    ZoneNotFound,
)
from tzlab.tasks import Task, TaskContext, run_task

logger = logging.getLogger(__name__)

ERROR_SUCCESS = 0
ERR_RUNTIME = 1
ERR_TASK_SPECIFIER_INVALID = 2
# 3 is not used: every Task has a runner.
ERR_TEST_CASE_FILENAME_IS_MISSING = 4
ERR_TEST_CASE_FILE_NOT_FOUND = 5
ERR_MISSING_TIME_ZONE_ID = 6
ERR_INVALID_TIME_ZONE_ID = 7

EXIT_CODES = [
    (EdgeCaseFileNameMissing, ERR_TEST_CASE_FILENAME_IS_MISSING),
    (EdgeCaseFileNotFound, ERR_TEST_CASE_FILE_NOT_FOUND),
    (MissingZoneId, ERR_MISSING_TIME_ZONE_ID),
    (ZoneNotFound, ERR_INVALID_TIME_ZONE_ID),
]


class OutputFormat(Enum):
    VERBOSE = "verbose"
    TERSE = "terse"
    QUIET = "quiet"

    @classmethod
    def parse(cls, text: str) -> "OutputFormat":
        aliases = {
            "verbose": cls.VERBOSE,
            "v": cls.VERBOSE,
            "terse": cls.TERSE,
            "t": cls.TERSE,
            "quiet": cls.QUIET,
            "q": cls.QUIET,
            "none": cls.QUIET,
            "n": cls.QUIET,
        }
        try:
            return aliases[text.strip().lower()]
        except KeyError:
            raise argparse.ArgumentTypeError(
                f"invalid output format '{text}' (choose from verbose, terse, quiet, none)"
            ) from None


LOG_LEVELS = {
    OutputFormat.VERBOSE: logging.INFO,
    OutputFormat.TERSE: logging.WARNING,
    OutputFormat.QUIET: logging.ERROR,
}


def _task_arg(text: str) -> Task:
    try:
        return Task.parse(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tzlab",
        description="Explore the installed time zones: enumerate, convert and dump DST adjustments.",
    )
    parser.add_argument(
        "task",
        nargs="?",
        type=_task_arg,
        default=Task.ALL,
        help="Task to run: " + ", ".join(task.value for task in Task) + " (default: All)",
    )
    parser.add_argument(
        "zone_id",
        nargs="?",
        help="Time zone id for EnumerateTimeZoneAdjustments and ShowTimeZone",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=OutputFormat.parse,
        default=OutputFormat.VERBOSE,
        help="Output format: verbose, terse, quiet or none (v, t, q, n)",
    )
    parser.add_argument("--settings", type=Path, help="JSON settings file (default: ./tzlab.json)")
    parser.add_argument("--report-file", type=Path, help="Write the edge-case conversion report here")
    parser.add_argument("--from-year", type=int, help="First year of the adjustments report")
    parser.add_argument("--to-year", type=int, help="Last year of the adjustments report")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def exit_code_for(exc: BaseException) -> int:
    for error_type, code in EXIT_CODES:
        if isinstance(exc, error_type):
            return code
    return ERR_RUNTIME


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=LOG_LEVELS[args.output],
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    verbose = args.output is OutputFormat.VERBOSE
    if verbose:
        print(f"tzlab {__version__}: time zone laboratory")
        print(f"Selected task = {args.task.value}")

    try:
        settings = load_settings(args.settings)
        if args.report_file is not None:
            settings = replace(settings, edge_case_report_file=args.report_file)
        ctx = TaskContext(
            settings=settings,
            zone_id=args.zone_id,
            from_year=args.from_year,
            to_year=args.to_year,
            verbose=verbose,
        )
        run_task(args.task, ctx)
    except (
        EdgeCaseFileNameMissing,
        EdgeCaseFileNotFound,
        MissingZoneId,
        ZoneNotFound,
    ) as exc:
        logger.error("%s", exc)
        return exit_code_for(exc)
    except (EdgeCaseFileInvalid, ReportIOFailure, ValueError, OSError) as exc:
        logger.error("%s", exc, exc_info=verbose)
        return ERR_RUNTIME

    if verbose:
        print(f"Task {args.task.value} done.")
    return ERROR_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
