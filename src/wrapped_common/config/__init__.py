"""Shared configuration."""

from wrapped_common.config.constants import DEFAULT_DATABASE_URL
from wrapped_common.config.database import DatabaseSettings

__all__ = [
    "DEFAULT_DATABASE_URL",
    "DatabaseSettings",
]
