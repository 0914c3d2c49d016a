"""Spotify access-token lifecycle: reuse while fresh, refresh when close to expiry."""

import logging
from datetime import UTC, datetime, timedelta

import httpx

from wrapped_api.auth.exceptions import TokenRefreshError
from wrapped_api.auth.schemas import SpotifyTokenResponse
from wrapped_api.settings import AppSettings
from wrapped_common.crypto import TokenEncryptor
from wrapped_common.db.models.user import SpotifyUser
from wrapped_common.spotify import SpotifyClient
from wrapped_common.spotify.constants import SPOTIFY_TOKEN_URL

logger = logging.getLogger(__name__)


def _as_aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


class TokenManager:
    """Keeps a SpotifyUser's access token usable.

    Updates are made on the ORM object, so they persist when the caller's
    session commits.
    """

    def __init__(self, settings: AppSettings) -> None:
        self._settings = settings
        self._encryptor = TokenEncryptor(settings.TOKEN_ENCRYPTION_KEY)

    async def get_valid_token(self, user: SpotifyUser) -> str:
        """Return the stored access token, refreshing it first if it is about to expire.

        Raises:
            TokenRefreshError: If no refresh token is stored or Spotify refuses it.
        """
        buffer = timedelta(seconds=self._settings.TOKEN_EXPIRY_BUFFER_SECONDS)
        if (
            user.access_token
            and user.token_expires_at
            and _as_aware(user.token_expires_at) > datetime.now(UTC) + buffer
        ):
            return user.access_token
        return await self.refresh_access_token(user)

    async def refresh_access_token(self, user: SpotifyUser) -> str:
        if not user.encrypted_refresh_token:
            raise TokenRefreshError(user.spotify_user_id, "No refresh token stored")
        refresh_token = self._encryptor.decrypt(user.encrypted_refresh_token)

        async with httpx.AsyncClient() as client:
            response = await client.post(
                SPOTIFY_TOKEN_URL,
                data={
                    "grant_type": "refresh_token",
                    "refresh_token": refresh_token,
                    "client_id": self._settings.SPOTIFY_CLIENT_ID,
                    "client_secret": self._settings.SPOTIFY_CLIENT_SECRET,
                },
            )
        if not response.is_success:
            raise TokenRefreshError(
                user.spotify_user_id,
                f"Spotify returned HTTP {response.status_code} during token refresh",
            )

        token_data = SpotifyTokenResponse.model_validate(response.json())
        user.access_token = token_data.access_token
        user.token_expires_at = datetime.now(UTC) + timedelta(seconds=token_data.expires_in)
        if token_data.refresh_token:
            user.encrypted_refresh_token = self._encryptor.encrypt(token_data.refresh_token)
        logger.info("Refreshed Spotify access token for %s", user.spotify_user_id)
        return token_data.access_token

    async def client_for(self, user: SpotifyUser) -> SpotifyClient:
        """A SpotifyClient for ``user`` that refreshes its token on a 401."""
        access_token = await self.get_valid_token(user)

        async def on_token_expired() -> str:
            return await self.refresh_access_token(user)

        return SpotifyClient(access_token, on_token_expired=on_token_expired)
