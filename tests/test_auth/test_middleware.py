"""Tests for JWTAuthMiddleware and the auth dependencies."""

from typing import Any

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from wrapped_api.auth.dependencies import CurrentUser
from wrapped_api.auth.jwt import JWTService
from wrapped_api.auth.middleware import JWTAuthMiddleware
from wrapped_api.errors import register_exception_handlers
from wrapped_api.settings import AppSettings


def _create_test_app() -> FastAPI:
    test_app = FastAPI()
    test_app.add_middleware(JWTAuthMiddleware)
    register_exception_handlers(test_app)

    @test_app.get("/whoami")
    async def whoami(request: Request) -> dict[str, Any]:
        return {"user_id": request.state.user_id}

    @test_app.get("/private")
    async def private(user_id: CurrentUser) -> dict[str, Any]:
        return {"user_id": user_id}

    @test_app.get("/healthz")
    async def healthz(request: Request) -> dict[str, Any]:
        return {"user_id": request.state.user_id}

    return test_app


@pytest.fixture
def jwt_service(app_settings: AppSettings) -> JWTService:
    return JWTService(app_settings)


@pytest.fixture
def mw_client(app_settings: AppSettings, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    monkeypatch.setattr("wrapped_api.auth.middleware.get_settings", lambda: app_settings)
    return TestClient(_create_test_app())


def test_no_token_means_signed_out(mw_client: TestClient) -> None:
    assert mw_client.get("/whoami").json() == {"user_id": None}


def test_bearer_token_sets_user(mw_client: TestClient, jwt_service: JWTService) -> None:
    token = jwt_service.create_access_token(42)
    resp = mw_client.get("/whoami", headers={"Authorization": f"Bearer {token}"})
    assert resp.json() == {"user_id": 42}


def test_cookie_token_sets_user(mw_client: TestClient, jwt_service: JWTService) -> None:
    mw_client.cookies.set("access_token", jwt_service.create_access_token(99))
    assert mw_client.get("/whoami").json() == {"user_id": 99}


def test_bearer_takes_precedence_over_cookie(mw_client: TestClient, jwt_service: JWTService) -> None:
    mw_client.cookies.set("access_token", jwt_service.create_access_token(20))
    token = jwt_service.create_access_token(10)
    resp = mw_client.get("/whoami", headers={"Authorization": f"Bearer {token}"})
    assert resp.json() == {"user_id": 10}


def test_refresh_token_is_not_a_session(mw_client: TestClient, jwt_service: JWTService) -> None:
    token = jwt_service.create_refresh_token(5)
    resp = mw_client.get("/whoami", headers={"Authorization": f"Bearer {token}"})
    assert resp.json() == {"user_id": None}


def test_garbage_token_is_ignored(mw_client: TestClient) -> None:
    resp = mw_client.get("/whoami", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 200
    assert resp.json() == {"user_id": None}


def test_health_path_skips_token_check(mw_client: TestClient, jwt_service: JWTService) -> None:
    token = jwt_service.create_access_token(1)
    resp = mw_client.get("/healthz", headers={"Authorization": f"Bearer {token}"})
    assert resp.json() == {"user_id": None}


def test_current_user_dependency_rejects_anonymous(mw_client: TestClient, jwt_service: JWTService) -> None:
    assert mw_client.get("/private").status_code == 401
    assert mw_client.get("/private").json() == {"error": "Unauthorized"}
    token = jwt_service.create_access_token(3)
    assert mw_client.get("/private", headers={"Authorization": f"Bearer {token}"}).json() == {"user_id": 3}
