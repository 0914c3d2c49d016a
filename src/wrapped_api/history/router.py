"""History REST endpoints: class-based router."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from wrapped_api.auth.dependencies import CurrentAccount, CurrentOwner
from wrapped_api.auth.exceptions import TokenRefreshError
from wrapped_api.auth.tokens import TokenManager
from wrapped_api.dependencies import db_manager, get_db_manager
from wrapped_api.history.schemas import ScrobbleResult
from wrapped_api.history.service import HistoryImportService, ScrobbleService
from wrapped_api.settings import AppSettings, get_settings
from wrapped_common.db.session import DatabaseManager
from wrapped_common.history_import.models import ImportResult
from wrapped_common.spotify import SpotifyClientError

logger = logging.getLogger(__name__)


class HistoryRouter:
    """Class-based router for history ingestion endpoints."""

    def __init__(self) -> None:
        self._import_service = HistoryImportService()
        self._scrobble_service = ScrobbleService()
        self.router = APIRouter()
        self.router.add_api_route("/import", self.import_history, methods=["POST"], response_model=ImportResult)
        self.router.add_api_route("/scrobble", self.scrobble, methods=["POST"], response_model=ScrobbleResult)

    @staticmethod
    async def _read_entries(request: Request) -> list[object]:
        """Pull ``entries`` out of the body; anything but a non-empty list is a 400."""
        try:
            body = await request.json()
        except ValueError as exc:
            raise HTTPException(status_code=400, detail="No entries provided") from exc
        entries = body.get("entries") if isinstance(body, dict) else None
        if not isinstance(entries, list) or not entries:
            raise HTTPException(status_code=400, detail="No entries provided")
        return entries

    async def import_history(
        self,
        request: Request,
        owner_id: CurrentOwner,
        manager: Annotated[DatabaseManager, Depends(get_db_manager)],
    ) -> ImportResult:
        """Import one transport chunk of an extended streaming-history export.

        Body: ``{"entries": [...]}``. Plays under 30s and entries without a
        track URI are skipped; re-sent entries are ignored, so retries are safe.
        """
        entries = await self._read_entries(request)
        try:
            return await self._import_service.import_batch(owner_id, entries, manager)
        except Exception as exc:
            logger.exception("History import for %s failed", owner_id)
            raise HTTPException(status_code=500, detail="Import failed") from exc

    async def scrobble(
        self,
        account: CurrentAccount,
        session: Annotated[AsyncSession, Depends(db_manager.dependency)],
        settings: Annotated[AppSettings, Depends(get_settings)],
    ) -> ScrobbleResult:
        """Store the user's recently-played tracks since the last scrobble."""
        try:
            client = await TokenManager(settings).client_for(account)
            return await self._scrobble_service.scrobble(account, client, session)
        except (TokenRefreshError, SpotifyClientError) as exc:
            logger.warning("Scrobble for %s failed: %s", account.spotify_user_id, exc)
            raise HTTPException(status_code=502, detail="Could not reach Spotify") from exc


_instance = HistoryRouter()
router = _instance.router
