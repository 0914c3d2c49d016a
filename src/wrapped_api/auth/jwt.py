"""JWT session token creation and validation."""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from wrapped_api.settings import AppSettings


class JWTError(Exception):
    """Base exception for JWT operations."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


class JWTExpiredError(JWTError):
    """Token has expired."""


class JWTInvalidError(JWTError):
    """Bad signature, malformed payload, or wrong token type."""


class JWTService:
    """Issues and checks HS256 access/refresh tokens keyed on TOKEN_ENCRYPTION_KEY.

    ``sub`` carries the internal spotify_users.id as a string.
    """

    ALGORITHM = "HS256"
    ACCESS = "access"
    REFRESH = "refresh"

    def __init__(self, settings: AppSettings) -> None:
        secret = settings.TOKEN_ENCRYPTION_KEY
        if not secret or not secret.strip():
            raise ValueError("TOKEN_ENCRYPTION_KEY must be set to a non-empty value for JWT signing")
        self._secret = secret
        self._lifetimes = {
            self.ACCESS: timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES),
            self.REFRESH: timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS),
        }
        self._cookie_secure = settings.JWT_COOKIE_SECURE
        self._cookie_domain = settings.JWT_COOKIE_DOMAIN

    def _encode(self, user_id: int, token_type: str) -> str:
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "type": token_type,
            "iat": now,
            "exp": now + self._lifetimes[token_type],
        }
        return jwt.encode(payload, self._secret, algorithm=self.ALGORITHM)

    def create_access_token(self, user_id: int) -> str:
        return self._encode(user_id, self.ACCESS)

    def create_refresh_token(self, user_id: int) -> str:
        return self._encode(user_id, self.REFRESH)

    def create_token_pair(self, user_id: int) -> tuple[str, str]:
        """Returns (access, refresh)."""
        return self.create_access_token(user_id), self.create_refresh_token(user_id)

    def decode_access_token(self, token: str) -> int:
        """Return the user id from an access token.

        Raises:
            JWTExpiredError: If the token has expired.
            JWTInvalidError: If the token is malformed, mis-signed or not an access token.
        """
        return self._decode(token, self.ACCESS)

    def decode_refresh_token(self, token: str) -> int:
        """Return the user id from a refresh token. Raises like decode_access_token."""
        return self._decode(token, self.REFRESH)

    @property
    def access_expire_seconds(self) -> int:
        return int(self._lifetimes[self.ACCESS].total_seconds())

    @property
    def refresh_expire_seconds(self) -> int:
        return int(self._lifetimes[self.REFRESH].total_seconds())

    @property
    def cookie_secure(self) -> bool:
        return self._cookie_secure

    @property
    def cookie_domain(self) -> str | None:
        return self._cookie_domain or None

    def _decode(self, token: str, expected_type: str) -> int:
        try:
            payload: dict[str, Any] = jwt.decode(token, self._secret, algorithms=[self.ALGORITHM])
        except jwt.ExpiredSignatureError as exc:
            raise JWTExpiredError("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise JWTInvalidError(f"Invalid token: {exc}") from exc

        if payload.get("type") != expected_type:
            raise JWTInvalidError(f"Expected token type {expected_type!r}")
        sub = payload.get("sub")
        try:
            return int(sub)  # type: ignore[arg-type]
        except (ValueError, TypeError) as exc:
            raise JWTInvalidError(f"Invalid 'sub' claim: {sub!r}") from exc
