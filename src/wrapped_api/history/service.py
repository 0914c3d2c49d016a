"""History ingestion: bulk export import and recently-played scrobbling."""

import logging
from datetime import UTC

from sqlalchemy.ext.asyncio import AsyncSession

from wrapped_api.history.schemas import ScrobbleResult
from wrapped_common.db.enums import HistorySource
from wrapped_common.db.models.user import SpotifyUser
from wrapped_common.db.operations import HistoryRepository
from wrapped_common.db.session import DatabaseManager
from wrapped_common.history_import.batching import iter_chunks
from wrapped_common.history_import.constants import STORE_CHUNK_SIZE
from wrapped_common.history_import.models import ImportCounters, ImportResult, Rejection, StoredHistoryRow
from wrapped_common.history_import.normalizers import normalize_play_event
from wrapped_common.spotify import SpotifyClient
from wrapped_common.spotify.models import SpotifyPlayHistoryItem

logger = logging.getLogger(__name__)


class HistoryImportService:
    """Filters raw export entries and stores them chunk by chunk.

    Each store chunk runs in its own transaction. A failing chunk is logged
    and counted; later chunks still run and earlier ones stay committed.
    """

    def __init__(
        self,
        repository: HistoryRepository | None = None,
        chunk_size: int = STORE_CHUNK_SIZE,
    ) -> None:
        self._repository = repository or HistoryRepository()
        self._chunk_size = chunk_size

    async def import_batch(
        self,
        owner_id: str,
        entries: list[object],
        db_manager: DatabaseManager,
    ) -> ImportResult:
        counters = ImportCounters()

        for index, chunk in enumerate(iter_chunks(entries, self._chunk_size)):
            rows: list[StoredHistoryRow] = []
            for raw in chunk:
                outcome = normalize_play_event(raw, owner_id)
                if isinstance(outcome, Rejection):
                    counters.record_rejection(outcome)
                else:
                    rows.append(outcome)

            if not rows:
                continue

            try:
                async with db_manager.session() as session:
                    inserted = await self._repository.insert_ignore_duplicates(rows, session)
            except Exception:
                counters.failed_chunks += 1
                logger.exception("Import chunk %d for %s failed (%d rows)", index, owner_id, len(rows))
                continue

            counters.inserted += inserted
            logger.info(
                "Import chunk %d for %s: %d of %d rows inserted",
                index,
                owner_id,
                inserted,
                len(rows),
            )

        result = counters.to_result(total=len(entries))
        logger.info(
            "Import for %s finished: %d inserted, %d short, %d no track, %d invalid, %d failed chunks, %d total",
            owner_id,
            result.inserted,
            result.skipped_short,
            result.skipped_no_track,
            result.skipped_invalid,
            result.failed_chunks,
            result.total,
        )
        return result


def _scrobble_row(item: SpotifyPlayHistoryItem, owner_id: str) -> StoredHistoryRow | None:
    track = item.track
    if not track.uri:
        return None
    played_at = item.played_at if item.played_at.tzinfo else item.played_at.replace(tzinfo=UTC)
    return StoredHistoryRow(
        spotify_user_id=owner_id,
        ts=played_at.astimezone(UTC),
        ms_played=track.duration_ms or 0,
        track_name=track.name,
        artist_name=track.artists[0].name if track.artists else None,
        album_name=track.album.name if track.album else None,
        spotify_track_uri=track.uri,
        source=HistorySource.SCROBBLE,
    )


class ScrobbleService:
    """Copies recently-played items into streaming_history with source=scrobble."""

    def __init__(self, repository: HistoryRepository | None = None) -> None:
        self._repository = repository or HistoryRepository()

    async def scrobble(self, user: SpotifyUser, client: SpotifyClient, session: AsyncSession) -> ScrobbleResult:
        after: int | None = None
        if user.last_scrobble_at is not None:
            last = user.last_scrobble_at
            if last.tzinfo is None:
                last = last.replace(tzinfo=UTC)
            after = int(last.timestamp() * 1000)

        response = await client.get_recently_played(limit=50, after=after)
        rows: list[StoredHistoryRow] = []
        for item in response.items:
            row = _scrobble_row(item, user.spotify_user_id)
            if row is not None:
                rows.append(row)

        inserted = 0
        for chunk in iter_chunks(rows, STORE_CHUNK_SIZE):
            inserted += await self._repository.insert_ignore_duplicates(chunk, session)

        if rows:
            user.last_scrobble_at = max(row.ts for row in rows)

        logger.info("Scrobbled %s: %d fetched, %d inserted", user.spotify_user_id, len(response.items), inserted)
        return ScrobbleResult(fetched=len(response.items), inserted=inserted, last_scrobble_at=user.last_scrobble_at)
