"""Analytics REST endpoint: class-based router."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wrapped_api.analytics.schemas import AnalyticsResponse
from wrapped_api.analytics.service import AnalyticsService
from wrapped_api.auth.dependencies import CurrentOwner
from wrapped_api.constants import ANALYTICS_WINDOW_DAYS
from wrapped_api.dependencies import db_manager

logger = logging.getLogger(__name__)


class AnalyticsRouter:
    """Class-based router for listening analytics."""

    def __init__(self) -> None:
        self._service = AnalyticsService()
        self.router = APIRouter()
        self.router.add_api_route("", self.analytics, methods=["GET"], response_model=AnalyticsResponse)

    async def analytics(
        self,
        owner_id: CurrentOwner,
        session: Annotated[AsyncSession, Depends(db_manager.dependency)],
        days: int = Query(default=ANALYTICS_WINDOW_DAYS, ge=1, le=366),
    ) -> AnalyticsResponse:
        """Daily minutes, hourly play counts, top artists and an overall summary."""
        try:
            return await self._service.get_analytics(owner_id, session, days)
        except SQLAlchemyError as exc:
            logger.exception("Analytics query failed for %s", owner_id)
            raise HTTPException(status_code=500, detail="Failed to fetch analytics") from exc


_instance = AnalyticsRouter()
router = _instance.router
