"""SQLAlchemy aggregate queries over streaming_history: class-based."""

from datetime import UTC, datetime, timedelta

from sqlalchemy import Date, Integer, cast, extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from wrapped_common.db.models.history import StreamingHistory


class AnalyticsQueries:
    """Stateless query builder for listening analytics.

    Day and hour buckets are computed in UTC. SQLite (tests) and PostgreSQL
    need different date functions, chosen from the session's dialect.
    """

    @staticmethod
    def _dialect(session: AsyncSession) -> str:
        return session.bind.dialect.name if session.bind else "postgresql"

    @staticmethod
    async def daily_listening(
        spotify_user_id: str,
        session: AsyncSession,
        days: int,
    ) -> list[dict[str, object]]:
        """Total ms played per calendar day over the last ``days`` days."""
        cutoff = datetime.now(UTC) - timedelta(days=days)
        if AnalyticsQueries._dialect(session) == "sqlite":
            day_expr = func.date(StreamingHistory.ts)
        else:
            day_expr = cast(func.timezone("UTC", StreamingHistory.ts), Date)

        stmt = (
            select(
                day_expr.label("date"),
                func.sum(StreamingHistory.ms_played).label("ms_played"),
            )
            .where(StreamingHistory.spotify_user_id == spotify_user_id, StreamingHistory.ts >= cutoff)
            .group_by(day_expr)
            .order_by(day_expr)
        )
        result = await session.execute(stmt)
        return [dict(row._mapping) for row in result.all()]

    @staticmethod
    async def hourly_listening(spotify_user_id: str, session: AsyncSession) -> list[dict[str, object]]:
        """Play counts per hour of day across all stored history."""
        if AnalyticsQueries._dialect(session) == "sqlite":
            hour_expr = cast(func.strftime("%H", StreamingHistory.ts), Integer)
        else:
            hour_expr = cast(extract("hour", func.timezone("UTC", StreamingHistory.ts)), Integer)

        stmt = (
            select(hour_expr.label("hour"), func.count(StreamingHistory.id).label("count"))
            .where(StreamingHistory.spotify_user_id == spotify_user_id)
            .group_by(hour_expr)
            .order_by(hour_expr)
        )
        result = await session.execute(stmt)
        return [dict(row._mapping) for row in result.all()]

    @staticmethod
    async def top_artists(
        spotify_user_id: str,
        session: AsyncSession,
        limit: int,
    ) -> list[dict[str, object]]:
        play_count = func.count(StreamingHistory.id)
        stmt = (
            select(StreamingHistory.artist_name.label("artist_name"), play_count.label("play_count"))
            .where(
                StreamingHistory.spotify_user_id == spotify_user_id,
                StreamingHistory.artist_name.is_not(None),
            )
            .group_by(StreamingHistory.artist_name)
            .order_by(play_count.desc(), StreamingHistory.artist_name)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return [dict(row._mapping) for row in result.all()]

    @staticmethod
    async def totals(spotify_user_id: str, session: AsyncSession) -> dict[str, int]:
        """Total ms played and row count across all stored history."""
        stmt = select(
            func.coalesce(func.sum(StreamingHistory.ms_played), 0).label("total_ms"),
            func.count(StreamingHistory.id).label("total_tracks"),
        ).where(StreamingHistory.spotify_user_id == spotify_user_id)
        row = (await session.execute(stmt)).one()
        return {"total_ms": int(row.total_ms), "total_tracks": int(row.total_tracks)}
