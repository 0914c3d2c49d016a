"""Data models for streaming-history import records."""

import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from wrapped_common.db.enums import HistorySource


class PlayEvent(BaseModel):
    """One raw record from an extended streaming-history export.

    Field names follow the export file. Unknown fields (IP address, user
    agent, platform, ...) are dropped during validation.
    """

    ts: str | None = None
    ms_played: int = Field(ge=0, strict=True)
    master_metadata_track_name: str | None = None
    master_metadata_album_artist_name: str | None = None
    master_metadata_album_album_name: str | None = None
    spotify_track_uri: str | None = None
    skipped: bool | None = None


class StoredHistoryRow(BaseModel):
    """A normalized play ready to be written to streaming_history."""

    spotify_user_id: str
    ts: datetime
    ms_played: int
    track_name: str | None = None
    artist_name: str | None = None
    album_name: str | None = None
    spotify_track_uri: str
    skipped: bool = False
    source: HistorySource = HistorySource.IMPORT


class Rejection(enum.StrEnum):
    """Why a raw record was not turned into a stored row."""

    SHORT_PLAY = "skipped_short"
    NO_TRACK = "skipped_no_track"
    INVALID = "invalid"


class ImportResult(BaseModel):
    """Response of the import endpoint, serialized with camelCase keys.

    ``success``, ``inserted``, ``skippedShort`` and ``total`` are the stable
    contract; the remaining counters are diagnostics.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    inserted: int
    skipped_short: int
    total: int
    skipped_no_track: int = 0
    skipped_invalid: int = 0
    failed_chunks: int = 0


class ImportCounters(BaseModel):
    """Running totals for one import request."""

    inserted: int = 0
    skipped_short: int = 0
    skipped_no_track: int = 0
    skipped_invalid: int = 0
    failed_chunks: int = 0

    def record_rejection(self, rejection: Rejection) -> None:
        if rejection is Rejection.SHORT_PLAY:
            self.skipped_short += 1
        elif rejection is Rejection.NO_TRACK:
            self.skipped_no_track += 1
        else:
            self.skipped_invalid += 1

    def to_result(self, total: int) -> ImportResult:
        return ImportResult(
            inserted=self.inserted,
            skipped_short=self.skipped_short,
            skipped_no_track=self.skipped_no_track,
            skipped_invalid=self.skipped_invalid,
            failed_chunks=self.failed_chunks,
            total=total,
        )
