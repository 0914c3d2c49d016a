"""Tests for ExportFileReader."""

import json
from pathlib import Path

import pytest

from wrapped_importer.export_reader import ExportFileError, ExportFileReader


def test_reads_array_of_records(tmp_path: Path) -> None:
    records = [
        {"ts": "2023-01-15T10:30:00Z", "ms_played": 45000, "spotify_track_uri": "spotify:track:a", "skipped": None},
        {"ts": "2023-01-15T10:35:00Z", "ms_played": 1000, "spotify_track_uri": None, "skipped": True},
    ]
    path = tmp_path / "Streaming_History_Audio_2023.json"
    path.write_text(json.dumps(records), encoding="utf-8")

    assert ExportFileReader().read(path) == records


def test_reads_empty_array(tmp_path: Path) -> None:
    path = tmp_path / "empty.json"
    path.write_text("  []\n", encoding="utf-8")
    assert ExportFileReader().read(path) == []


def test_floats_come_back_as_float(tmp_path: Path) -> None:
    path = tmp_path / "f.json"
    path.write_text('[{"ms_played": 45000, "offline_timestamp": 1.5}]', encoding="utf-8")
    record = ExportFileReader().read(path)[0]
    assert record["ms_played"] == 45000
    assert isinstance(record["offline_timestamp"], float)


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ('[{"ts": "2023-01-15T10:30:00Z", ', "invalid JSON"),
        ('{"entries": []}', "not an array"),
        ("42", "not an array"),
    ],
)
def test_bad_files_raise(tmp_path: Path, content: str, message: str) -> None:
    path = tmp_path / "bad.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ExportFileError, match=message):
        ExportFileReader().read(path)


def test_empty_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "blank.json"
    path.write_bytes(b"")
    with pytest.raises(ExportFileError):
        ExportFileReader().read(path)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ExportFileError, match="cannot read"):
        ExportFileReader().read(tmp_path / "nope.json")
