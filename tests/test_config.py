from __future__ import annotations

import json
from pathlib import Path

import pytest

from tzlab.config import DEFAULT_EDGE_CASE_FILE, LabSettings, load_settings


def _write_settings(path: Path, payload: dict) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_defaults_without_a_settings_file(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    settings = load_settings()
    assert settings == LabSettings()
    assert settings.edge_case_input_file == DEFAULT_EDGE_CASE_FILE
    assert DEFAULT_EDGE_CASE_FILE.is_file()
    assert settings.edge_case_report_file is None


def test_settings_file_in_working_directory_is_picked_up(tmp_path: Path, monkeypatch):
    _write_settings(tmp_path / "tzlab.json", {"target_zone": "Europe/Paris"})
    monkeypatch.chdir(tmp_path)
    assert load_settings().target_zone == "Europe/Paris"


def test_relative_paths_resolve_against_settings_directory(tmp_path: Path):
    path = _write_settings(
        tmp_path / "lab.json",
        {
            "edge_case_input_file": "cases.tsv",
            "edge_case_report_file": "out/report.txt",
            "source_zone": "Asia/Tokyo",
            "report_encoding": "utf-16",
        },
    )
    settings = load_settings(path)
    assert settings.edge_case_input_file == tmp_path.resolve() / "cases.tsv"
    assert settings.edge_case_report_file == tmp_path.resolve() / "out" / "report.txt"
    assert settings.source_zone == "Asia/Tokyo"
    assert settings.target_zone == "America/Chicago"
    assert settings.report_encoding == "utf-16"


def test_empty_input_file_name_is_kept_as_missing(tmp_path: Path):
    path = _write_settings(tmp_path / "lab.json", {"edge_case_input_file": ""})
    assert load_settings(path).edge_case_input_file is None


def test_unknown_keys_are_rejected(tmp_path: Path):
    path = _write_settings(tmp_path / "lab.json", {"target_zone": "UTC", "colour": "blue"})
    with pytest.raises(ValueError, match="colour"):
        load_settings(path)
