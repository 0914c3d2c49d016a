"""Spotify proxy endpoints and wrapped statistics."""

from wrapped_api.spotify.router import router

__all__ = ["router"]
