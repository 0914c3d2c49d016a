"""Streaming-history import and scrobble endpoints."""

from wrapped_api.history.router import router

__all__ = ["router"]
