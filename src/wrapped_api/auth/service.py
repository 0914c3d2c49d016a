"""OAuth service: business logic for the Spotify authorization flow."""

import logging
from datetime import UTC, datetime, timedelta
from urllib.parse import urlencode

import httpx
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wrapped_api.auth.exceptions import InvalidStateError, SpotifyAPIError
from wrapped_api.auth.schemas import AuthCallbackResponse, SpotifyProfileSummary, SpotifyTokenResponse
from wrapped_api.auth.state import OAuthStateManager
from wrapped_api.constants import SPOTIFY_SCOPES
from wrapped_api.settings import AppSettings
from wrapped_common.crypto import TokenEncryptor
from wrapped_common.db.models.user import SpotifyUser
from wrapped_common.spotify import SpotifyClient, SpotifyClientError
from wrapped_common.spotify.constants import SPOTIFY_AUTHORIZE_URL, SPOTIFY_TOKEN_URL
from wrapped_common.spotify.models import SpotifyUserProfile

logger = logging.getLogger(__name__)


class OAuthService:
    """Runs the Spotify authorization-code flow and keeps spotify_users current."""

    def __init__(self, settings: AppSettings) -> None:
        self._settings = settings
        self._state_manager = OAuthStateManager(
            key=settings.TOKEN_ENCRYPTION_KEY,
            ttl_seconds=settings.OAUTH_STATE_TTL_SECONDS,
        )
        self._encryptor = TokenEncryptor(settings.TOKEN_ENCRYPTION_KEY)

    def get_authorization_url(self) -> str:
        params = {
            "client_id": self._settings.SPOTIFY_CLIENT_ID,
            "response_type": "code",
            "redirect_uri": self._settings.SPOTIFY_REDIRECT_URI,
            "scope": SPOTIFY_SCOPES,
            "state": self._state_manager.generate(),
        }
        return f"{SPOTIFY_AUTHORIZE_URL}?{urlencode(params)}"

    async def handle_callback(self, code: str, state: str, session: AsyncSession) -> tuple[AuthCallbackResponse, int]:
        """Validate state, exchange the code, upsert the user.

        Returns (response, internal user id) so the router can mint a session.

        Raises:
            InvalidStateError: If the state parameter is invalid or expired.
            SpotifyAPIError: If any Spotify call fails.
        """
        if not self._state_manager.verify(state):
            raise InvalidStateError("Invalid or expired state parameter")

        token_response = await self._exchange_code(code)
        profile = await self._fetch_profile(token_response.access_token)
        user, is_new = await self._upsert_user(profile, token_response, session)
        logger.info("Spotify user %s signed in (new=%s)", profile.id, is_new)

        response = AuthCallbackResponse(
            message="Authorization successful",
            user=SpotifyProfileSummary(
                spotify_user_id=user.spotify_user_id,
                display_name=user.display_name,
                image_url=user.image_url,
            ),
            is_new_user=is_new,
        )
        return response, user.id

    async def _exchange_code(self, code: str) -> SpotifyTokenResponse:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                SPOTIFY_TOKEN_URL,
                data={
                    "grant_type": "authorization_code",
                    "code": code,
                    "redirect_uri": self._settings.SPOTIFY_REDIRECT_URI,
                    "client_id": self._settings.SPOTIFY_CLIENT_ID,
                    "client_secret": self._settings.SPOTIFY_CLIENT_SECRET,
                },
            )
        self._check_spotify_response(response, "exchange authorization code")
        return SpotifyTokenResponse.model_validate(response.json())

    @staticmethod
    async def _fetch_profile(access_token: str) -> SpotifyUserProfile:
        try:
            return await SpotifyClient(access_token, max_retries=1).get_me()
        except SpotifyClientError as exc:
            status = getattr(exc, "status_code", 502)
            raise SpotifyAPIError(
                action="fetch user profile",
                status_code=status,
                detail=f"Could not fetch user profile from Spotify: {exc}",
            ) from exc

    @staticmethod
    def _check_spotify_response(response: httpx.Response, action: str) -> None:
        """Raise SpotifyAPIError with a readable message if the response is not OK."""
        if response.is_success:
            return
        status = response.status_code
        if status == 429:
            detail = f"Rate limited by Spotify while trying to {action}. Please try again later."
        elif status >= 500:
            detail = f"Spotify server error while trying to {action}."
        elif status == 400:
            detail = f"Spotify rejected the request to {action}. The authorization code may have expired."
        else:
            detail = f"Spotify returned HTTP {status} while trying to {action}."
        raise SpotifyAPIError(action=action, status_code=status, detail=detail)

    async def _upsert_user(
        self,
        profile: SpotifyUserProfile,
        token_response: SpotifyTokenResponse,
        session: AsyncSession,
    ) -> tuple[SpotifyUser, bool]:
        """Insert or update the SpotifyUser and its tokens. Returns (user, is_new)."""
        result = await session.execute(select(SpotifyUser).where(SpotifyUser.spotify_user_id == profile.id))
        user = result.scalar_one_or_none()
        is_new = user is None
        if user is None:
            if token_response.refresh_token is None:
                raise SpotifyAPIError(
                    action="token exchange",
                    status_code=200,
                    detail="Spotify did not return a refresh token.",
                )
            user = SpotifyUser(spotify_user_id=profile.id)
            session.add(user)

        user.display_name = profile.display_name
        user.email = profile.email
        user.image_url = profile.images[0].url if profile.images else None
        user.access_token = token_response.access_token
        user.token_expires_at = datetime.now(UTC) + timedelta(seconds=token_response.expires_in)
        if token_response.refresh_token:
            user.encrypted_refresh_token = self._encryptor.encrypt(token_response.refresh_token)

        await session.flush()
        return user, is_new
