"""Main FastAPI application for the Spotify Wrapped API."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wrapped_api.analytics import router as analytics_router
from wrapped_api.auth import router as auth_router
from wrapped_api.auth.middleware import JWTAuthMiddleware
from wrapped_api.constants import APP_DESCRIPTION, APP_TITLE, APP_VERSION, Routes, ServiceName
from wrapped_api.dependencies import db_manager
from wrapped_api.errors import register_exception_handlers
from wrapped_api.history import router as history_router
from wrapped_api.logging import configure_logging
from wrapped_api.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from wrapped_api.settings import get_settings
from wrapped_api.spotify import router as spotify_router


class WrappedApp:
    """Application container: configures middleware, routers, and lifespan."""

    app: FastAPI

    def __init__(self) -> None:
        configure_logging(ServiceName.API)
        self.app = FastAPI(
            title=APP_TITLE,
            description=APP_DESCRIPTION,
            version=APP_VERSION,
            lifespan=self._lifespan,
        )
        register_exception_handlers(self.app)
        self._setup_middleware()
        self._setup_routers()

    @staticmethod
    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncGenerator[None]:
        try:
            yield
        finally:
            await db_manager.dispose()

    def _setup_middleware(self) -> None:
        settings = get_settings()

        # Added innermost first; RequestID ends up wrapping JWT so auth logs carry the id
        self.app.add_middleware(JWTAuthMiddleware)
        self.app.add_middleware(SecurityHeadersMiddleware)
        self.app.add_middleware(RequestIDMiddleware)

        origins = [o.strip() for o in settings.CORS_ALLOWED_ORIGINS.split(",") if o.strip()]
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _setup_routers(self) -> None:
        self.app.include_router(auth_router, prefix=Routes.AUTH.prefix, tags=[Routes.AUTH.tag])
        self.app.include_router(history_router, prefix=Routes.HISTORY.prefix, tags=[Routes.HISTORY.tag])
        self.app.include_router(analytics_router, prefix=Routes.ANALYTICS.prefix, tags=[Routes.ANALYTICS.tag])
        self.app.include_router(spotify_router, prefix=Routes.SPOTIFY.prefix, tags=[Routes.SPOTIFY.tag])

        @self.app.get(Routes.HEALTH)
        async def health_check() -> dict[str, str]:
            return {"status": "healthy"}

        @self.app.get("/")
        async def root() -> dict[str, str]:
            return {"message": APP_TITLE, "version": APP_VERSION}


_application = WrappedApp()
app: FastAPI = _application.app
