"""Spotify API client and models."""

from wrapped_common.spotify.client import SpotifyClient
from wrapped_common.spotify.exceptions import (
    SpotifyAuthError,
    SpotifyClientError,
    SpotifyRateLimitError,
    SpotifyRequestError,
    SpotifyServerError,
)

__all__ = [
    "SpotifyClient",
    "SpotifyAuthError",
    "SpotifyClientError",
    "SpotifyRateLimitError",
    "SpotifyRequestError",
    "SpotifyServerError",
]
