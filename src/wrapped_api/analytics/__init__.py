"""Listening analytics computed from stored streaming history."""

from wrapped_api.analytics.router import router

__all__ = ["router"]
