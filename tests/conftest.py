"""Shared fixtures: SQLite database, test settings and an authenticated app client."""

from collections.abc import AsyncGenerator, Awaitable, Callable, Generator
from datetime import datetime
from pathlib import Path

import pytest
from cryptography.fernet import Fernet
from fastapi.testclient import TestClient
from sqlalchemy import BigInteger
from sqlalchemy.ext.compiler import compiles

from wrapped_api.auth.jwt import JWTService
from wrapped_api.dependencies import db_manager, get_db_manager
from wrapped_api.main import app
from wrapped_api.settings import AppSettings, get_settings
from wrapped_common.crypto import TokenEncryptor
from wrapped_common.db.base import Base
from wrapped_common.db.models.user import SpotifyUser
from wrapped_common.db.session import DatabaseManager

TEST_FERNET_KEY = Fernet.generate_key().decode()


# BigInteger renders as INTEGER on SQLite so primary keys autoincrement.
@compiles(BigInteger, "sqlite")  # type: ignore[misc]
def _compile_big_integer_sqlite(type_: BigInteger, compiler: object, **kw: object) -> str:
    return "INTEGER"


def _test_settings() -> AppSettings:
    return AppSettings(
        SPOTIFY_CLIENT_ID="test-client-id",
        SPOTIFY_CLIENT_SECRET="test-client-secret",
        SPOTIFY_REDIRECT_URI="http://localhost:8000/auth/callback",
        TOKEN_ENCRYPTION_KEY=TEST_FERNET_KEY,
        JWT_COOKIE_SECURE=False,
        POST_LOGIN_REDIRECT_URL="http://localhost:3000/dashboard",
    )


@pytest.fixture
def app_settings() -> AppSettings:
    return _test_settings()


@pytest.fixture
async def db(tmp_path: Path) -> AsyncGenerator[DatabaseManager]:
    """File-backed SQLite so every session (NullPool) sees the same data."""
    manager = DatabaseManager.from_url(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
def make_user(db: DatabaseManager) -> Callable[..., Awaitable[SpotifyUser]]:
    async def _make(
        spotify_user_id: str = "alice",
        *,
        access_token: str | None = "spotify-access",
        expires_at: datetime | None = None,
        refresh_token: str | None = "spotify-refresh",
    ) -> SpotifyUser:
        encryptor = TokenEncryptor(TEST_FERNET_KEY)
        async with db.session() as session:
            user = SpotifyUser(
                spotify_user_id=spotify_user_id,
                display_name=spotify_user_id.title(),
                access_token=access_token,
                token_expires_at=expires_at,
                encrypted_refresh_token=encryptor.encrypt(refresh_token) if refresh_token else None,
            )
            session.add(user)
            await session.flush()
        return user

    return _make


@pytest.fixture
def auth_headers(app_settings: AppSettings) -> Callable[[int], dict[str, str]]:
    def _headers(user_id: int) -> dict[str, str]:
        token = JWTService(app_settings).create_access_token(user_id)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def client(db: DatabaseManager, monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient]:
    # The middleware calls get_settings() directly (not via DI)
    monkeypatch.setattr("wrapped_api.auth.middleware.get_settings", _test_settings)
    app.dependency_overrides[db_manager.dependency] = db.dependency
    app.dependency_overrides[get_db_manager] = lambda: db
    app.dependency_overrides[get_settings] = _test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()
