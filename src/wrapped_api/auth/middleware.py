"""JWT authentication middleware: extracts the signed-in user from tokens."""

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from wrapped_api.auth.jwt import JWTError, JWTService
from wrapped_api.constants import ACCESS_TOKEN_COOKIE
from wrapped_api.settings import get_settings

_SKIP_PREFIXES = ("/healthz", "/docs", "/openapi.json", "/redoc")
_SKIP_EXACT = frozenset({"/", "/auth/login", "/auth/callback"})


class JWTAuthMiddleware(BaseHTTPMiddleware):
    """Set ``request.state.user_id`` from a valid access token, or None.

    Never rejects a request; endpoints that need a user depend on
    ``CurrentUser`` / ``CurrentOwner``.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.user_id = None

        if self._should_skip(request.url.path):
            return await call_next(request)

        token = self._extract_token(request)
        if token is not None:
            try:
                request.state.user_id = JWTService(get_settings()).decode_access_token(token)
            except JWTError:
                pass  # invalid or expired: treated as signed out

        return await call_next(request)

    @staticmethod
    def _should_skip(path: str) -> bool:
        if path in _SKIP_EXACT:
            return True
        return any(path.startswith(prefix) for prefix in _SKIP_PREFIXES)

    @staticmethod
    def _extract_token(request: Request) -> str | None:
        """Bearer header first, then the HTTP-only access_token cookie."""
        auth_header = request.headers.get("authorization", "")
        if auth_header.startswith("Bearer "):
            return auth_header.removeprefix("Bearer ").strip() or None
        return request.cookies.get(ACCESS_TOKEN_COOKIE)
