"""Application settings loaded from environment variables."""

import functools

from pydantic_settings import BaseSettings

from wrapped_api.constants import (
    DEFAULT_OAUTH_STATE_TTL_SECONDS,
    DEFAULT_POST_LOGIN_REDIRECT_URL,
    DEFAULT_SPOTIFY_REDIRECT_URI,
    DEFAULT_TOKEN_EXPIRY_BUFFER_SECONDS,
)


class AppSettings(BaseSettings):
    """API service configuration."""

    SPOTIFY_CLIENT_ID: str = ""
    SPOTIFY_CLIENT_SECRET: str = ""
    SPOTIFY_REDIRECT_URI: str = DEFAULT_SPOTIFY_REDIRECT_URI
    # Fernet key; also the HMAC secret for JWTs and OAuth state
    TOKEN_ENCRYPTION_KEY: str = ""
    OAUTH_STATE_TTL_SECONDS: int = DEFAULT_OAUTH_STATE_TTL_SECONDS
    TOKEN_EXPIRY_BUFFER_SECONDS: int = DEFAULT_TOKEN_EXPIRY_BUFFER_SECONDS

    # Session tokens
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    JWT_REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    JWT_COOKIE_SECURE: bool = True  # False for local dev over HTTP
    JWT_COOKIE_DOMAIN: str = ""

    # Browser flow
    POST_LOGIN_REDIRECT_URL: str = DEFAULT_POST_LOGIN_REDIRECT_URL
    CORS_ALLOWED_ORIGINS: str = "http://localhost:3000"  # comma-separated

    model_config = {"env_prefix": ""}


@functools.lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return cached application settings singleton."""
    return AppSettings()
