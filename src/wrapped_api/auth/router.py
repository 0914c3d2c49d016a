"""Spotify OAuth HTTP endpoints: class-based router delegating to OAuthService."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from wrapped_api.auth.exceptions import InvalidStateError, SpotifyAPIError
from wrapped_api.auth.jwt import JWTExpiredError, JWTInvalidError, JWTService
from wrapped_api.auth.schemas import JWTTokenResponse, RefreshTokenRequest
from wrapped_api.auth.service import OAuthService
from wrapped_api.constants import ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE, Routes
from wrapped_api.dependencies import db_manager
from wrapped_api.settings import AppSettings, get_settings
from wrapped_common.db.models.user import SpotifyUser

_REFRESH_COOKIE_PATH = f"{Routes.AUTH.prefix}/refresh"


def _get_oauth_service(settings: Annotated[AppSettings, Depends(get_settings)]) -> OAuthService:
    return OAuthService(settings)


def _get_jwt_service(settings: Annotated[AppSettings, Depends(get_settings)]) -> JWTService:
    return JWTService(settings)


class AuthRouter:
    """Class-based router for Spotify OAuth and JWT endpoints."""

    def __init__(self) -> None:
        self.router = APIRouter()
        self.router.add_api_route("/login", self.login, methods=["GET"])
        self.router.add_api_route("/callback", self.callback, methods=["GET"], response_model=None)
        self.router.add_api_route("/refresh", self.refresh, methods=["POST"])
        self.router.add_api_route("/logout", self.logout, methods=["POST"], response_model=None)

    async def login(
        self,
        service: Annotated[OAuthService, Depends(_get_oauth_service)],
    ) -> RedirectResponse:
        """Redirect the browser to Spotify's consent page."""
        return RedirectResponse(url=service.get_authorization_url())

    async def callback(
        self,
        request: Request,
        code: Annotated[str, Query()],
        state: Annotated[str, Query()],
        session: Annotated[AsyncSession, Depends(db_manager.dependency)],
        service: Annotated[OAuthService, Depends(_get_oauth_service)],
        jwt_service: Annotated[JWTService, Depends(_get_jwt_service)],
        settings: Annotated[AppSettings, Depends(get_settings)],
    ) -> Response:
        """Exchange the code, upsert the user and start a session.

        Browsers are redirected with cookies set; API clients get JSON that
        also carries the tokens.
        """
        try:
            result, user_id = await service.handle_callback(code, state, session)
        except InvalidStateError as exc:
            raise HTTPException(status_code=400, detail="Invalid or expired state parameter") from exc
        except SpotifyAPIError as exc:
            raise HTTPException(status_code=502, detail=exc.detail) from exc

        access_token, refresh_token = jwt_service.create_token_pair(user_id)

        if "text/html" in request.headers.get("accept", ""):
            response: Response = RedirectResponse(url=settings.POST_LOGIN_REDIRECT_URL, status_code=303)
        else:
            result.access_token = access_token
            result.refresh_token = refresh_token
            result.expires_in = jwt_service.access_expire_seconds
            response = JSONResponse(content=result.model_dump())
        self._set_auth_cookies(response, access_token, refresh_token, jwt_service)
        return response

    async def refresh(
        self,
        request: Request,
        jwt_service: Annotated[JWTService, Depends(_get_jwt_service)],
        session: Annotated[AsyncSession, Depends(db_manager.dependency)],
        body: RefreshTokenRequest | None = None,
    ) -> JWTTokenResponse:
        """Mint a new access token from a refresh token in the body or cookie."""
        token = body.refresh_token if body is not None else request.cookies.get(REFRESH_TOKEN_COOKIE)
        if token is None:
            raise HTTPException(status_code=401, detail="No refresh token provided")

        try:
            user_id = jwt_service.decode_refresh_token(token)
        except JWTExpiredError as exc:
            raise HTTPException(status_code=401, detail="Refresh token has expired") from exc
        except JWTInvalidError as exc:
            raise HTTPException(status_code=401, detail="Invalid refresh token") from exc

        if await session.get(SpotifyUser, user_id) is None:
            raise HTTPException(status_code=401, detail="User not found")

        return JWTTokenResponse(
            access_token=jwt_service.create_access_token(user_id),
            expires_in=jwt_service.access_expire_seconds,
        )

    async def logout(
        self,
        jwt_service: Annotated[JWTService, Depends(_get_jwt_service)],
    ) -> Response:
        response = JSONResponse(content={"message": "Logged out"})
        response.delete_cookie(ACCESS_TOKEN_COOKIE, path="/", domain=jwt_service.cookie_domain)
        response.delete_cookie(REFRESH_TOKEN_COOKIE, path=_REFRESH_COOKIE_PATH, domain=jwt_service.cookie_domain)
        return response

    @staticmethod
    def _set_auth_cookies(
        response: Response,
        access_token: str,
        refresh_token: str,
        jwt_service: JWTService,
    ) -> None:
        """HTTP-only cookies; the refresh cookie is only sent to the refresh endpoint."""
        for key, value, max_age, path in (
            (ACCESS_TOKEN_COOKIE, access_token, jwt_service.access_expire_seconds, "/"),
            (REFRESH_TOKEN_COOKIE, refresh_token, jwt_service.refresh_expire_seconds, _REFRESH_COOKIE_PATH),
        ):
            response.set_cookie(
                key=key,
                value=value,
                max_age=max_age,
                httponly=True,
                secure=jwt_service.cookie_secure,
                samesite="lax",
                path=path,
                domain=jwt_service.cookie_domain,
            )


_instance = AuthRouter()
router = _instance.router
