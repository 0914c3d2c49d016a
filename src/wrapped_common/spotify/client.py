"""Async Spotify Web API client with retry and rate-limit handling."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from wrapped_common.spotify.constants import (
    CURRENTLY_PLAYING_URL,
    DEFAULT_CONCURRENCY_LIMIT,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MIN_POPULARITY,
    DEFAULT_RECOMMENDATION_LIMIT,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RETRY_BASE_DELAY,
    MAX_SEED_ARTISTS,
    MAX_SEED_TRACKS,
    ME_URL,
    PLAYLIST_URL,
    RECENTLY_PLAYED_URL,
    RECOMMENDATIONS_URL,
    TOP_ARTISTS_URL,
    TOP_TRACKS_URL,
    USER_PLAYLISTS_URL,
)
from wrapped_common.spotify.exceptions import (
    SpotifyAuthError,
    SpotifyRateLimitError,
    SpotifyRequestError,
    SpotifyServerError,
)
from wrapped_common.spotify.models import (
    CurrentlyPlayingResponse,
    RecentlyPlayedResponse,
    RecommendationsResponse,
    SpotifyPlaylist,
    SpotifySnapshotResponse,
    SpotifyUserProfile,
    TopArtistsResponse,
    TopTracksResponse,
)

logger = logging.getLogger(__name__)


def _error_detail(response: httpx.Response) -> str:
    """Best-effort message from a Spotify error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] if response.text else f"HTTP {response.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return f"HTTP {response.status_code}"


class SpotifyClient:
    """Async Spotify Web API client bound to one user's access token.

    429 and 5xx responses are retried with backoff. A 401 is retried once
    after calling ``on_token_expired`` for a fresh token, when given.
    """

    def __init__(
        self,
        access_token: str,
        *,
        on_token_expired: Callable[[], Awaitable[str]] | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_base_delay: float = DEFAULT_RETRY_BASE_DELAY,
        concurrency_limit: int = DEFAULT_CONCURRENCY_LIMIT,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self._access_token = access_token
        self._on_token_expired = on_token_expired
        self._max_retries = max_retries
        self._retry_base_delay = retry_base_delay
        self._semaphore = asyncio.Semaphore(concurrency_limit)
        self._request_timeout = request_timeout

    def _backoff(self, attempt: int) -> float:
        return self._retry_base_delay * (2**attempt)

    async def _send(
        self,
        method: str,
        url: str,
        params: dict[str, str | int] | None,
        json_body: dict[str, Any] | None,
    ) -> httpx.Response:
        async with self._semaphore:
            async with httpx.AsyncClient(timeout=self._request_timeout) as client:
                return await client.request(
                    method,
                    url,
                    params=params,
                    json=json_body,
                    headers={"Authorization": f"Bearer {self._access_token}"},
                )

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, str | int] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send a request, retrying 429/5xx and refreshing the token once on 401."""
        refreshed = False
        last_status = 0
        last_retry_after: float | None = None

        for attempt in range(self._max_retries + 1):
            response = await self._send(method, url, params, json_body)
            status = response.status_code
            last_status = status

            if response.is_success:
                return response

            if status == 401:
                if self._on_token_expired is None or refreshed:
                    raise SpotifyAuthError("Spotify returned 401 Unauthorized")
                refreshed = True
                logger.info("Spotify returned 401, refreshing access token")
                self._access_token = await self._on_token_expired()
                continue

            if status == 429:
                header = response.headers.get("Retry-After")
                delay = float(header) if header else self._backoff(attempt)
                last_retry_after = delay
            elif status >= 500:
                delay = self._backoff(attempt)
            else:
                raise SpotifyRequestError(status_code=status, detail=_error_detail(response))

            if attempt < self._max_retries:
                logger.warning(
                    "Spotify returned %d, retrying in %.1fs (attempt %d/%d)",
                    status,
                    delay,
                    attempt + 1,
                    self._max_retries,
                )
                await asyncio.sleep(delay)

        if last_status == 429:
            raise SpotifyRateLimitError(retry_after=last_retry_after)
        raise SpotifyServerError(status_code=last_status, detail="Max retries exhausted")

    # -------------------------------------------------------------------
    # Profile & playback
    # -------------------------------------------------------------------

    async def get_me(self) -> SpotifyUserProfile:
        """GET /me."""
        response = await self._request("GET", ME_URL)
        return SpotifyUserProfile.model_validate(response.json())

    async def get_currently_playing(self) -> CurrentlyPlayingResponse | None:
        """GET /me/player/currently-playing. None when nothing is playing (204)."""
        response = await self._request("GET", CURRENTLY_PLAYING_URL)
        if response.status_code == 204 or not response.content:
            return None
        return CurrentlyPlayingResponse.model_validate(response.json())

    async def get_recently_played(
        self,
        *,
        limit: int = 50,
        before: int | None = None,
        after: int | None = None,
    ) -> RecentlyPlayedResponse:
        """GET /me/player/recently-played. ``before``/``after`` are unix ms cursors."""
        params: dict[str, str | int] = {"limit": limit}
        if before is not None:
            params["before"] = before
        if after is not None:
            params["after"] = after
        response = await self._request("GET", RECENTLY_PLAYED_URL, params=params)
        return RecentlyPlayedResponse.model_validate(response.json())

    # -------------------------------------------------------------------
    # Top items & recommendations
    # -------------------------------------------------------------------

    async def get_top_artists(
        self,
        *,
        time_range: str = "medium_term",
        limit: int = 20,
        offset: int = 0,
    ) -> TopArtistsResponse:
        response = await self._request(
            "GET",
            TOP_ARTISTS_URL,
            params={"time_range": time_range, "limit": limit, "offset": offset},
        )
        return TopArtistsResponse.model_validate(response.json())

    async def get_top_tracks(
        self,
        *,
        time_range: str = "medium_term",
        limit: int = 20,
        offset: int = 0,
    ) -> TopTracksResponse:
        response = await self._request(
            "GET",
            TOP_TRACKS_URL,
            params={"time_range": time_range, "limit": limit, "offset": offset},
        )
        return TopTracksResponse.model_validate(response.json())

    async def get_recommendations(
        self,
        *,
        seed_tracks: list[str],
        seed_artists: list[str],
        limit: int = DEFAULT_RECOMMENDATION_LIMIT,
        min_popularity: int = DEFAULT_MIN_POPULARITY,
    ) -> RecommendationsResponse:
        """GET /recommendations seeded with up to 3 tracks and 2 artists."""
        params: dict[str, str | int] = {"limit": limit, "min_popularity": min_popularity}
        if seed_tracks:
            params["seed_tracks"] = ",".join(seed_tracks[:MAX_SEED_TRACKS])
        if seed_artists:
            params["seed_artists"] = ",".join(seed_artists[:MAX_SEED_ARTISTS])
        response = await self._request("GET", RECOMMENDATIONS_URL, params=params)
        return RecommendationsResponse.model_validate(response.json())

    # -------------------------------------------------------------------
    # Playlist writes
    # -------------------------------------------------------------------

    async def create_playlist(
        self,
        name: str,
        *,
        description: str = "",
        public: bool = False,
    ) -> SpotifyPlaylist:
        """POST /me/playlists."""
        response = await self._request(
            "POST",
            USER_PLAYLISTS_URL,
            json_body={"name": name, "description": description, "public": public},
        )
        return SpotifyPlaylist.model_validate(response.json())

    async def add_tracks_to_playlist(self, playlist_id: str, uris: list[str]) -> SpotifySnapshotResponse:
        """POST /playlists/{id}/items. Spotify caps ``uris`` at 100 per call."""
        response = await self._request(
            "POST",
            f"{PLAYLIST_URL}/{playlist_id}/items",
            json_body={"uris": uris},
        )
        return SpotifySnapshotResponse.model_validate(response.json())
