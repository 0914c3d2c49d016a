"""Connection settings for the streaming-history database."""

from pydantic import field_validator
from pydantic_settings import BaseSettings

from wrapped_common.config.constants import DEFAULT_DATABASE_URL

_SYNC_POSTGRES_SCHEMES = ("postgres://", "postgresql://")
_ASYNC_POSTGRES_SCHEME = "postgresql+asyncpg://"


class DatabaseSettings(BaseSettings):
    """Engine options for the API and migrations, read from DATABASE_URL and friends.

    Hosted Postgres providers hand out plain ``postgres://`` URLs; those are
    rewritten to the asyncpg driver the engine needs.
    """

    database_url: str = DEFAULT_DATABASE_URL
    echo: bool = False
    use_null_pool: bool = True
    pool_pre_ping: bool = True

    model_config = {"env_prefix": ""}

    @field_validator("database_url")
    @classmethod
    def _use_async_driver(cls, value: str) -> str:
        for scheme in _SYNC_POSTGRES_SCHEMES:
            if value.startswith(scheme):
                return _ASYNC_POSTGRES_SCHEME + value[len(scheme) :]
        return value
