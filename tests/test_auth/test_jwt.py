"""Tests for JWTService."""

from datetime import UTC, datetime, timedelta

import jwt as pyjwt
import pytest

from wrapped_api.auth.jwt import JWTExpiredError, JWTInvalidError, JWTService
from wrapped_api.settings import AppSettings


@pytest.fixture
def service(app_settings: AppSettings) -> JWTService:
    return JWTService(app_settings)


def test_access_token_round_trip(service: JWTService) -> None:
    token = service.create_access_token(42)
    assert service.decode_access_token(token) == 42


def test_token_pair_types_are_not_interchangeable(service: JWTService) -> None:
    access, refresh = service.create_token_pair(7)
    assert service.decode_refresh_token(refresh) == 7
    with pytest.raises(JWTInvalidError, match="token type"):
        service.decode_access_token(refresh)
    with pytest.raises(JWTInvalidError, match="token type"):
        service.decode_refresh_token(access)


def test_expired_token_raises(app_settings: AppSettings, service: JWTService) -> None:
    payload = {
        "sub": "1",
        "type": "access",
        "iat": datetime.now(UTC) - timedelta(hours=2),
        "exp": datetime.now(UTC) - timedelta(hours=1),
    }
    token = pyjwt.encode(payload, app_settings.TOKEN_ENCRYPTION_KEY, algorithm="HS256")
    with pytest.raises(JWTExpiredError):
        service.decode_access_token(token)


def test_wrong_signature_raises(service: JWTService) -> None:
    token = pyjwt.encode({"sub": "1", "type": "access"}, "some-other-secret-that-is-long-enough", algorithm="HS256")
    with pytest.raises(JWTInvalidError):
        service.decode_access_token(token)


def test_non_numeric_subject_raises(app_settings: AppSettings, service: JWTService) -> None:
    token = pyjwt.encode(
        {"sub": "alice", "type": "access", "exp": datetime.now(UTC) + timedelta(minutes=5)},
        app_settings.TOKEN_ENCRYPTION_KEY,
        algorithm="HS256",
    )
    with pytest.raises(JWTInvalidError, match="sub"):
        service.decode_access_token(token)


def test_empty_secret_rejected() -> None:
    with pytest.raises(ValueError, match="TOKEN_ENCRYPTION_KEY"):
        JWTService(AppSettings(TOKEN_ENCRYPTION_KEY="  "))


def test_lifetimes_follow_settings(app_settings: AppSettings) -> None:
    service = JWTService(app_settings.model_copy(update={"JWT_ACCESS_TOKEN_EXPIRE_MINUTES": 5}))
    assert service.access_expire_seconds == 300
    assert service.refresh_expire_seconds == 7 * 24 * 3600
