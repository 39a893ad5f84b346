"""
Unit tests for API rate limiting.

Tests the in-memory limiter directly, the quota on v1 routes through
TestClient, and backend selection during startup with Redis mocked.
"""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi import FastAPI, HTTPException, Request
from fastapi.testclient import TestClient
from fastapi_limiter.depends import RateLimiter

from src.api import limiter
from src.api.dependencies import get_administrator_service
from src.api.errors import register_exception_handlers
from src.api.limiter import (
    TOO_MANY_REQUESTS_DETAIL,
    LocalRateLimiter,
    close_rate_limiter,
    get_rate_limiter,
    init_rate_limiter,
)
from src.api.v1 import router
from src.config.settings import Settings
from src.domain.entities import Administrator
from src.domain.services import IdentityService


def make_request(host: str = "127.0.0.1", path: str = "/v1/users/authenticate") -> Mock:
    request = Mock(spec=Request)
    request.client = Mock()
    request.client.host = host
    request.method = "POST"
    request.scope = {"route": Mock(path=path)}
    return request


def hit(rate_limiter: LocalRateLimiter, request: Mock) -> None:
    asyncio.run(rate_limiter(request, Mock()))


class TestLocalRateLimiter:
    """Tests for the in-memory sliding window."""

    def test_allows_up_to_quota_then_rejects(self) -> None:
        rate_limiter = LocalRateLimiter(times=2, milliseconds=60000)
        request = make_request()

        hit(rate_limiter, request)
        hit(rate_limiter, request)
        with pytest.raises(HTTPException) as exc_info:
            hit(rate_limiter, request)

        assert exc_info.value.status_code == 429
        assert exc_info.value.detail == TOO_MANY_REQUESTS_DETAIL
        assert int(exc_info.value.headers["Retry-After"]) <= 60

    def test_clients_are_counted_separately(self) -> None:
        rate_limiter = LocalRateLimiter(times=1, milliseconds=60000)

        hit(rate_limiter, make_request(host="10.0.0.1"))
        hit(rate_limiter, make_request(host="10.0.0.2"))

    def test_routes_are_counted_separately(self) -> None:
        rate_limiter = LocalRateLimiter(times=1, milliseconds=60000)

        hit(rate_limiter, make_request(path="/v1/users/authenticate"))
        hit(rate_limiter, make_request(path="/v1/administrators/authenticate"))

    def test_hits_expire_after_window(self, monkeypatch: pytest.MonkeyPatch) -> None:
        clock = Mock(monotonic=Mock(side_effect=[0.0, 0.5, 1.5]))
        monkeypatch.setattr(limiter, "time", clock)
        rate_limiter = LocalRateLimiter(times=1, milliseconds=1000)
        request = make_request()

        hit(rate_limiter, request)
        with pytest.raises(HTTPException):
            hit(rate_limiter, request)
        hit(rate_limiter, request)


class TestRateLimitedRoutes:
    """Tests for the quota applied to v1 routes."""

    @pytest.fixture
    def app(self, admin_service: IdentityService[Administrator]) -> FastAPI:
        test_app = FastAPI()
        register_exception_handlers(test_app)
        test_app.include_router(router, prefix="/v1")
        test_app.dependency_overrides[get_administrator_service] = lambda: admin_service
        return test_app

    def use_settings(self, monkeypatch: pytest.MonkeyPatch, **overrides: object) -> None:
        monkeypatch.setattr(limiter, "get_settings", lambda: Settings(**overrides))

    def test_authenticate_over_quota_returns_429(
        self, app: FastAPI, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        self.use_settings(monkeypatch, rate_limit_requests=2, rate_limit_window_ms=60000)
        client = TestClient(app)
        credentials = {"email": "a@ex.com", "password": "guess01"}

        statuses = [
            client.post("/v1/administrators/authenticate", json=credentials).status_code
            for _ in range(2)
        ]
        rejected = client.post("/v1/administrators/authenticate", json=credentials)

        assert statuses == [401, 401]
        assert rejected.status_code == 429
        assert rejected.json() == {"detail": "Too Many Requests"}
        assert "retry-after" in rejected.headers

    def test_quota_is_per_route(self, app: FastAPI, monkeypatch: pytest.MonkeyPatch) -> None:
        self.use_settings(monkeypatch, rate_limit_requests=1, rate_limit_window_ms=60000)
        client = TestClient(app)

        assert client.get("/v1/administrators").status_code == 200
        assert client.get("/v1/administrators").status_code == 429
        assert client.post(
            "/v1/administrators/authenticate",
            json={"email": "a@ex.com", "password": "guess01"},
        ).status_code == 401

    def test_disabled_limit_never_rejects(
        self, app: FastAPI, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        self.use_settings(monkeypatch, rate_limit_enabled=False, rate_limit_requests=1)
        client = TestClient(app)

        for _ in range(3):
            assert client.get("/v1/administrators").status_code == 200


class TestLimiterBackend:
    """Tests for backend selection at startup."""

    def test_without_redis_uses_local_limiter(self) -> None:
        client = asyncio.run(init_rate_limiter(None))

        assert client is None
        assert isinstance(get_rate_limiter(5, 1000), LocalRateLimiter)

    def test_with_redis_uses_fastapi_limiter(self, monkeypatch: pytest.MonkeyPatch) -> None:
        redis_client = AsyncMock()
        from_url = Mock(return_value=redis_client)
        limiter_init = AsyncMock()
        monkeypatch.setattr(limiter.redis_async, "from_url", from_url)
        monkeypatch.setattr(limiter.FastAPILimiter, "init", limiter_init)

        client = asyncio.run(init_rate_limiter("redis://localhost:6379/0"))

        assert client is redis_client
        from_url.assert_called_once_with(
            "redis://localhost:6379/0", encoding="utf-8", decode_responses=True
        )
        limiter_init.assert_awaited_once_with(redis_client)
        assert isinstance(get_rate_limiter(5, 1000), RateLimiter)

        asyncio.run(close_rate_limiter(client))

        redis_client.aclose.assert_awaited_once()
        assert isinstance(get_rate_limiter(5, 1000), LocalRateLimiter)
