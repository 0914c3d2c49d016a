"""Tests for raw export record validation and mapping."""

from datetime import UTC, datetime
from typing import Any

import pytest

from wrapped_common.db.enums import HistorySource
from wrapped_common.history_import import Rejection, StoredHistoryRow, normalize_play_event
from wrapped_common.history_import.normalizers import parse_timestamp


def _entry(**overrides: Any) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "ts": "2023-01-15T10:30:00Z",
        "ms_played": 45_000,
        "master_metadata_track_name": "Song A",
        "master_metadata_album_artist_name": "Artist A",
        "master_metadata_album_album_name": "Album A",
        "spotify_track_uri": "spotify:track:aaa",
        "skipped": None,
        "ip_addr": "10.0.0.1",
        "platform": "android",
    }
    entry.update(overrides)
    return entry


def test_valid_entry_maps_to_row() -> None:
    row = normalize_play_event(_entry(), "alice")
    assert isinstance(row, StoredHistoryRow)
    assert row.spotify_user_id == "alice"
    assert row.ts == datetime(2023, 1, 15, 10, 30, tzinfo=UTC)
    assert row.ms_played == 45_000
    assert row.track_name == "Song A"
    assert row.artist_name == "Artist A"
    assert row.album_name == "Album A"
    assert row.spotify_track_uri == "spotify:track:aaa"
    assert row.source is HistorySource.IMPORT


def test_missing_skipped_defaults_to_false() -> None:
    row = normalize_play_event(_entry(skipped=None), "alice")
    assert isinstance(row, StoredHistoryRow)
    assert row.skipped is False

    row = normalize_play_event(_entry(skipped=True), "alice")
    assert isinstance(row, StoredHistoryRow)
    assert row.skipped is True


def test_missing_metadata_stored_as_null() -> None:
    raw = _entry()
    del raw["master_metadata_track_name"]
    raw["master_metadata_album_artist_name"] = None
    raw["master_metadata_album_album_name"] = ""
    row = normalize_play_event(raw, "alice")
    assert isinstance(row, StoredHistoryRow)
    assert row.track_name is None
    assert row.artist_name is None
    assert row.album_name is None


@pytest.mark.parametrize("ms_played", [0, 10_000, 29_999])
def test_short_play_rejected(ms_played: int) -> None:
    assert normalize_play_event(_entry(ms_played=ms_played), "alice") is Rejection.SHORT_PLAY


def test_exactly_threshold_is_kept() -> None:
    assert isinstance(normalize_play_event(_entry(ms_played=30_000), "alice"), StoredHistoryRow)


@pytest.mark.parametrize("uri", [None, ""])
def test_missing_track_uri_rejected(uri: str | None) -> None:
    assert normalize_play_event(_entry(spotify_track_uri=uri), "alice") is Rejection.NO_TRACK


def test_short_play_takes_precedence_over_missing_uri() -> None:
    assert normalize_play_event(_entry(ms_played=1_000, spotify_track_uri=None), "alice") is Rejection.SHORT_PLAY


@pytest.mark.parametrize(
    "raw",
    [
        "not a record",
        None,
        {"ts": "2023-01-15T10:30:00Z", "spotify_track_uri": "spotify:track:x"},
        _entry(ms_played=-5),
        _entry(ms_played="lots"),
        _entry(ms_played=True),
        _entry(ms_played="31000"),
        _entry(ms_played=31000.5),
        _entry(ms_played=31000.0),
    ],
)
def test_malformed_records_rejected_as_invalid(raw: object) -> None:
    assert normalize_play_event(raw, "alice") is Rejection.INVALID


@pytest.mark.parametrize("ts", [None, "", "yesterday"])
def test_bad_timestamp_rejected_as_invalid(ts: str | None) -> None:
    assert normalize_play_event(_entry(ts=ts), "alice") is Rejection.INVALID


def test_parse_timestamp_normalizes_offsets_to_utc() -> None:
    assert parse_timestamp("2023-01-15T12:30:00+02:00") == datetime(2023, 1, 15, 10, 30, tzinfo=UTC)


def test_parse_timestamp_treats_naive_as_utc() -> None:
    assert parse_timestamp("2023-01-15T10:30:00") == datetime(2023, 1, 15, 10, 30, tzinfo=UTC)
