"""Write path for streaming history rows."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from wrapped_common.db.base import utc_now
from wrapped_common.db.models.history import StreamingHistory

if TYPE_CHECKING:
    from wrapped_common.history_import.models import StoredHistoryRow

logger = logging.getLogger(__name__)

_NATURAL_KEY = ["spotify_user_id", "ts", "spotify_track_uri"]


class HistoryRepository:
    """Inserts streaming history rows with duplicate-ignoring semantics."""

    async def insert_ignore_duplicates(
        self,
        rows: list[StoredHistoryRow],
        session: AsyncSession,
    ) -> int:
        """Insert rows in one statement, skipping any whose natural key exists.

        Existing rows are never updated. Returns the number of rows actually
        written, so re-importing the same rows returns 0.
        """
        if not rows:
            return 0

        dialect_name = session.bind.dialect.name
        if dialect_name == "postgresql":
            insert = postgresql.insert
        elif dialect_name == "sqlite":
            insert = sqlite.insert
        else:
            raise NotImplementedError(f"Duplicate-ignoring insert not supported on {dialect_name!r}")

        created_at = utc_now()
        values = [{**row.model_dump(), "created_at": created_at} for row in rows]
        stmt = insert(StreamingHistory).values(values).on_conflict_do_nothing(index_elements=_NATURAL_KEY)
        result = await session.execute(stmt)
        inserted = max(result.rowcount or 0, 0)
        logger.debug("Inserted %d of %d history rows", inserted, len(rows))
        return inserted

    async def count_for_user(self, spotify_user_id: str, session: AsyncSession) -> int:
        result = await session.execute(
            select(func.count()).select_from(StreamingHistory).where(
                StreamingHistory.spotify_user_id == spotify_user_id
            )
        )
        return int(result.scalar_one())
