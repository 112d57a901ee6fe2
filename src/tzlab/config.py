"""Lab settings loaded from a JSON file.

Schema (JSON, every key optional):
{
  "edge_case_input_file": "edge_cases.tsv",
  "edge_case_report_file": "edge_case_report.txt",
  "source_zone": "America/Denver",
  "target_zone": "America/Chicago",
  "report_encoding": "utf-8"
}

Relative file names resolve against the directory holding the settings file.
Without an explicit path, ``tzlab.json`` in the working directory is used when
present; otherwise the defaults below apply.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Optional

DEFAULT_SETTINGS_NAME = "tzlab.json"
DEFAULT_EDGE_CASE_FILE = Path(__file__).resolve().parent / "data" / "edge_cases.tsv"


@dataclass(frozen=True)
class LabSettings:
    edge_case_input_file: Optional[Path] = field(default=DEFAULT_EDGE_CASE_FILE)
    edge_case_report_file: Optional[Path] = None
    source_zone: str = "America/Denver"
    target_zone: str = "America/Chicago"
    report_encoding: str = "utf-8"


def _load_json(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _optional_path(value, base: Path) -> Optional[Path]:
    if value in (None, ""):
        return None
    path = Path(value)
    return path if path.is_absolute() else base / path


def _settings_from_dict(d: dict, base: Path) -> LabSettings:
    known = {f.name for f in fields(LabSettings)}
    unknown = sorted(set(d) - known)
    if unknown:
        raise ValueError(f"Unknown settings keys: {unknown}")
    settings = LabSettings()
    if "edge_case_input_file" in d:
        settings = replace(settings, edge_case_input_file=_optional_path(d["edge_case_input_file"], base))
    if "edge_case_report_file" in d:
        settings = replace(settings, edge_case_report_file=_optional_path(d["edge_case_report_file"], base))
    for name in ("source_zone", "target_zone", "report_encoding"):
        if name in d:
            settings = replace(settings, **{name: str(d[name])})
    return settings


def load_settings(path: Optional[Path] = None) -> LabSettings:
    """Load settings from ``path``, or from ``tzlab.json`` in the working directory."""

    if path is None:
        candidate = Path.cwd() / DEFAULT_SETTINGS_NAME
        if not candidate.is_file():
            return LabSettings()
        path = candidate
    path = Path(path)
    return _settings_from_dict(_load_json(path), path.resolve().parent)
