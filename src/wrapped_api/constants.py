"""Centralized constants for the API service."""

import enum
from dataclasses import dataclass


class ServiceName(enum.StrEnum):
    """Service names used for logging and identification."""

    API = "api"
    IMPORTER = "importer"


APP_TITLE = "Spotify Wrapped API"
APP_DESCRIPTION = "Spotify sign-in, streaming-history import, analytics and wrapped statistics"
APP_VERSION = "0.1.0"


@dataclass(frozen=True, slots=True)
class _Route:
    """A route prefix paired with its OpenAPI tag."""

    prefix: str
    tag: str


class Routes:
    """API route prefixes and tags."""

    AUTH = _Route("/auth", "auth")
    HISTORY = _Route("/api/history", "history")
    ANALYTICS = _Route("/api/analytics", "analytics")
    SPOTIFY = _Route("/api/spotify", "spotify")
    HEALTH = "/healthz"


SPOTIFY_SCOPES = (
    "user-read-recently-played user-top-read user-read-currently-playing "
    "user-read-email user-read-private playlist-modify-private playlist-modify-public"
)

ACCESS_TOKEN_COOKIE = "access_token"
REFRESH_TOKEN_COOKIE = "refresh_token"

DEFAULT_SPOTIFY_REDIRECT_URI = "http://localhost:8000/auth/callback"
DEFAULT_POST_LOGIN_REDIRECT_URL = "http://localhost:3000/dashboard"
DEFAULT_OAUTH_STATE_TTL_SECONDS = 300
DEFAULT_TOKEN_EXPIRY_BUFFER_SECONDS = 60

# Analytics window used for the daily chart and the per-day average
ANALYTICS_WINDOW_DAYS = 30
TOP_ARTISTS_LIMIT = 10
