"""Analytics service: turns raw aggregates into the response model."""

from sqlalchemy.ext.asyncio import AsyncSession

from wrapped_api.analytics.queries import AnalyticsQueries
from wrapped_api.analytics.schemas import (
    AnalyticsResponse,
    ArtistPlayCount,
    DailyListening,
    HourlyListening,
    ListeningSummary,
)
from wrapped_api.constants import ANALYTICS_WINDOW_DAYS, TOP_ARTISTS_LIMIT

MS_PER_MINUTE = 60_000
MS_PER_HOUR = 3_600_000


class AnalyticsService:
    """Stateless service that builds AnalyticsResponse from query results."""

    async def get_analytics(
        self,
        spotify_user_id: str,
        session: AsyncSession,
        days: int = ANALYTICS_WINDOW_DAYS,
    ) -> AnalyticsResponse:
        daily_rows = await AnalyticsQueries.daily_listening(spotify_user_id, session, days)
        hourly_rows = await AnalyticsQueries.hourly_listening(spotify_user_id, session)
        artist_rows = await AnalyticsQueries.top_artists(spotify_user_id, session, TOP_ARTISTS_LIMIT)
        totals = await AnalyticsQueries.totals(spotify_user_id, session)

        return AnalyticsResponse(
            daily=[
                DailyListening(date=str(row["date"]), minutes=round(int(row["ms_played"] or 0) / MS_PER_MINUTE))
                for row in daily_rows
            ],
            hourly=[HourlyListening(hour=int(row["hour"]), count=int(row["count"])) for row in hourly_rows],
            top_artists=[ArtistPlayCount.model_validate(row) for row in artist_rows],
            summary=self.summarize(totals["total_ms"], totals["total_tracks"]),
        )

    @staticmethod
    def summarize(total_ms: int, total_tracks: int) -> ListeningSummary:
        """Hours listened, row count, and the average over the analytics window.

        The average divides unrounded hours by the window length.
        """
        hours = total_ms / MS_PER_HOUR
        return ListeningSummary(
            total_hours=round(hours),
            total_tracks=total_tracks,
            average_per_day=round(hours / ANALYTICS_WINDOW_DAYS),
        )
