"""Spotify proxy REST endpoints: class-based router."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query

from wrapped_api.auth.dependencies import CurrentAccount
from wrapped_api.auth.exceptions import TokenRefreshError
from wrapped_api.auth.tokens import TokenManager
from wrapped_api.settings import AppSettings, get_settings
from wrapped_api.spotify.schemas import (
    CreatePlaylistRequest,
    CreatePlaylistResponse,
    TimeRange,
    WrappedResponse,
)
from wrapped_api.spotify.service import SpotifyService
from wrapped_common.spotify import SpotifyClient, SpotifyClientError
from wrapped_common.spotify.models import CurrentlyPlayingResponse, RecentlyPlayedResponse, RecommendationsResponse

logger = logging.getLogger(__name__)


async def get_spotify_client(
    account: CurrentAccount,
    settings: Annotated[AppSettings, Depends(get_settings)],
) -> SpotifyClient:
    """SpotifyClient for the signed-in user; 401 if their Spotify grant is gone."""
    try:
        return await TokenManager(settings).client_for(account)
    except TokenRefreshError as exc:
        logger.warning("Spotify token refresh failed for %s: %s", account.spotify_user_id, exc.detail)
        raise HTTPException(status_code=401, detail="Spotify session expired") from exc


UserSpotifyClient = Annotated[SpotifyClient, Depends(get_spotify_client)]


def _split_ids(value: str | None) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()] if value else []


class SpotifyRouter:
    """Class-based router proxying the signed-in user's Spotify data."""

    def __init__(self) -> None:
        self._service = SpotifyService()
        self.router = APIRouter()
        r = self.router
        r.add_api_route("/now-playing", self.now_playing, methods=["GET"], response_model=CurrentlyPlayingResponse)
        r.add_api_route(
            "/recently-played",
            self.recently_played,
            methods=["GET"],
            response_model=RecentlyPlayedResponse,
        )
        r.add_api_route(
            "/recommendations",
            self.recommendations,
            methods=["GET"],
            response_model=RecommendationsResponse,
        )
        r.add_api_route(
            "/create-playlist",
            self.create_playlist,
            methods=["POST"],
            response_model=CreatePlaylistResponse,
        )
        r.add_api_route("/wrapped", self.wrapped, methods=["GET"], response_model=WrappedResponse)

    async def now_playing(self, client: UserSpotifyClient) -> CurrentlyPlayingResponse:
        """Currently playing track; reports nothing playing if Spotify errors."""
        try:
            return await self._service.now_playing(client)
        except SpotifyClientError as exc:
            logger.warning("now-playing failed: %s", exc)
            return CurrentlyPlayingResponse(is_playing=False, item=None)

    async def recently_played(self, client: UserSpotifyClient) -> RecentlyPlayedResponse:
        """Recently played tracks; an empty list if Spotify errors."""
        try:
            return await self._service.recently_played(client)
        except SpotifyClientError as exc:
            logger.warning("recently-played failed: %s", exc)
            return RecentlyPlayedResponse()

    async def recommendations(
        self,
        client: UserSpotifyClient,
        seed_tracks: str | None = Query(default=None, description="Comma-separated track IDs"),
        seed_artists: str | None = Query(default=None, description="Comma-separated artist IDs"),
    ) -> RecommendationsResponse:
        try:
            return await self._service.recommendations(client, _split_ids(seed_tracks), _split_ids(seed_artists))
        except SpotifyClientError as exc:
            logger.exception("Recommendations failed")
            raise HTTPException(status_code=500, detail="Failed to get recommendations") from exc

    async def create_playlist(
        self,
        body: CreatePlaylistRequest,
        client: UserSpotifyClient,
    ) -> CreatePlaylistResponse:
        """Save the given track URIs as a new private playlist."""
        if not body.track_uris:
            raise HTTPException(status_code=400, detail="No tracks provided")
        try:
            return await self._service.create_playlist(client, body.track_uris, body.name)
        except SpotifyClientError as exc:
            logger.exception("Playlist creation failed")
            raise HTTPException(status_code=500, detail="Failed to create playlist") from exc

    async def wrapped(
        self,
        client: UserSpotifyClient,
        time_range: TimeRange = Query(default=TimeRange.MEDIUM_TERM),
    ) -> WrappedResponse:
        """Top tracks/artists with estimated listening time for the chosen range."""
        try:
            return await self._service.wrapped(client, time_range)
        except SpotifyClientError as exc:
            logger.exception("Wrapped stats failed")
            raise HTTPException(status_code=500, detail="Failed to build wrapped stats") from exc


_instance = SpotifyRouter()
router = _instance.router
