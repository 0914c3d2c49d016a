"""Pydantic schemas for Spotify token responses and auth endpoint payloads."""

from pydantic import BaseModel


class SpotifyTokenResponse(BaseModel):
    """Response from Spotify's /api/token endpoint."""

    access_token: str
    token_type: str
    expires_in: int
    refresh_token: str | None = None
    scope: str | None = None


class SpotifyProfileSummary(BaseModel):
    spotify_user_id: str
    display_name: str | None = None
    image_url: str | None = None


class AuthCallbackResponse(BaseModel):
    message: str
    user: SpotifyProfileSummary
    is_new_user: bool
    access_token: str | None = None
    refresh_token: str | None = None
    expires_in: int | None = None


class JWTTokenResponse(BaseModel):
    access_token: str
    expires_in: int
    token_type: str = "Bearer"


class RefreshTokenRequest(BaseModel):
    """Request body for POST /auth/refresh (API clients)."""

    refresh_token: str
