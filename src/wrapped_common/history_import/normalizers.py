"""Turns raw streaming-history records into rows for the history table."""

import logging
from datetime import UTC, datetime

from pydantic import ValidationError

from wrapped_common.db.enums import HistorySource
from wrapped_common.history_import.constants import MIN_MS_PLAYED
from wrapped_common.history_import.models import PlayEvent, Rejection, StoredHistoryRow

logger = logging.getLogger(__name__)


def parse_timestamp(value: str) -> datetime:
    """Parse an export timestamp (e.g. "2023-01-15T10:30:00Z") as aware UTC.

    Naive values are taken to be UTC already.
    """
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _clean_text(value: str | None) -> str | None:
    return value or None


def normalize_play_event(raw: object, owner_id: str) -> StoredHistoryRow | Rejection:
    """Validate one raw record and map it to a StoredHistoryRow.

    Checks run in a fixed order and the first failure decides the outcome:
        1. not an object, or ms_played missing, negative or not a strict int (bools included) -> Rejection.INVALID
        2. ms_played below MIN_MS_PLAYED -> Rejection.SHORT_PLAY
        3. no spotify_track_uri -> Rejection.NO_TRACK
        4. ts missing or not ISO 8601 -> Rejection.INVALID

    Never raises for bad rows.
    """
    if not isinstance(raw, dict):
        return Rejection.INVALID

    try:
        event = PlayEvent.model_validate(raw)
    except ValidationError:
        return Rejection.INVALID

    if event.ms_played < MIN_MS_PLAYED:
        return Rejection.SHORT_PLAY

    if not event.spotify_track_uri:
        return Rejection.NO_TRACK

    if not event.ts:
        return Rejection.INVALID
    try:
        ts = parse_timestamp(event.ts)
    except (ValueError, TypeError):
        logger.warning("Skipping record with unparseable timestamp: %s", event.ts)
        return Rejection.INVALID

    return StoredHistoryRow(
        spotify_user_id=owner_id,
        ts=ts,
        ms_played=event.ms_played,
        track_name=_clean_text(event.master_metadata_track_name),
        artist_name=_clean_text(event.master_metadata_album_artist_name),
        album_name=_clean_text(event.master_metadata_album_album_name),
        spotify_track_uri=event.spotify_track_uri,
        skipped=bool(event.skipped),
        source=HistorySource.IMPORT,
    )
