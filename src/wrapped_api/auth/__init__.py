"""Spotify OAuth sign-in and JWT session handling."""

from wrapped_api.auth.router import router

__all__ = ["router"]
