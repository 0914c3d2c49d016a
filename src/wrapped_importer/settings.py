"""Importer settings loaded from environment variables."""

import functools

from pydantic_settings import BaseSettings


class ImporterSettings(BaseSettings):
    """Importer CLI configuration."""

    API_BASE_URL: str = "http://localhost:8000"
    # Session JWT issued by /auth/callback
    ACCESS_TOKEN: str = ""
    REQUEST_TIMEOUT_SECONDS: float = 60.0

    model_config = {"env_prefix": ""}


@functools.lru_cache(maxsize=1)
def get_settings() -> ImporterSettings:
    """Return cached importer settings singleton."""
    return ImporterSettings()
