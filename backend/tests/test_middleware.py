"""
CampusHub Backend — Middleware Tests
======================================

What we test:
    ✅ Credential endpoints are rate limited per IP with Retry-After
    ✅ Other routes are never rate limited
    ✅ 429 bodies come from the middleware, with no dead exception handler
    ✅ Every response carries an X-Request-ID, echoed into error bodies
"""

from types import SimpleNamespace

import pytest

from campushub.config import settings
from campushub.exceptions import RateLimitExceededError
from campushub.middleware import rate_limit


class TestRateLimit:

    @pytest.mark.asyncio
    async def test_login_limited_after_threshold(self, api, monkeypatch):
        monkeypatch.setattr(settings, "auth_rate_limit_requests", 3)

        for _ in range(3):
            response = await api.request("POST", "/login", json={"username": "x", "password": "y"})
            assert response.status_code == 401

        blocked = await api.request("POST", "/login", json={"username": "x", "password": "y"})

        assert blocked.status_code == 429
        body = blocked.json()
        assert body["status"] == "error"
        assert body["error"] == "rate_limit_exceeded"
        assert int(blocked.headers["Retry-After"]) >= 1

    @pytest.mark.asyncio
    async def test_limit_shared_by_credential_endpoints(self, api, monkeypatch):
        monkeypatch.setattr(settings, "auth_rate_limit_requests", 2)

        await api.request("POST", "/signup", json={})
        await api.request("POST", "/clublogin", json={})

        assert (await api.request("POST", "/login", json={})).status_code == 429

    @pytest.mark.asyncio
    async def test_other_routes_not_limited(self, api, monkeypatch):
        monkeypatch.setattr(settings, "auth_rate_limit_requests", 1)

        for _ in range(5):
            assert (await api.request("GET", "/listings")).status_code == 200

    @pytest.mark.asyncio
    async def test_window_expiry_releases_client(self, api, monkeypatch):
        clock = {"now": 1_000_000.0}
        monkeypatch.setattr(rate_limit, "time", SimpleNamespace(time=lambda: clock["now"]))
        monkeypatch.setattr(settings, "auth_rate_limit_requests", 1)
        monkeypatch.setattr(settings, "auth_rate_limit_window", 60)

        await api.request("POST", "/login", json={})
        assert (await api.request("POST", "/login", json={})).status_code == 429

        clock["now"] += 61
        assert (await api.request("POST", "/login", json={})).status_code == 401


class TestRequestID:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, api):
        response = await api.request("GET", "/listings")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_id_echoed(self, api):
        response = await api.request("GET", "/listings", headers={"X-Request-ID": "trace-123"})

        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_unsafe_client_id_replaced(self, api):
        response = await api.request("GET", "/listings", headers={"X-Request-ID": "bad id with spaces"})

        assert response.headers["X-Request-ID"] != "bad id with spaces"

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, api):
        response = await api.request("POST", "/makeproj", json={"name": "x"})

        assert response.status_code == 401
        assert response.json()["request_id"] == response.headers["X-Request-ID"]


class TestRateLimitResponse:

    @pytest.mark.asyncio
    async def test_rate_limit_answered_by_middleware_only(self, app, api, monkeypatch):
        monkeypatch.setattr(settings, "auth_rate_limit_requests", 1)

        await api.request("POST", "/signup", json={})
        blocked = await api.request("POST", "/signup", json={})

        assert RateLimitExceededError not in app.exception_handlers
        assert blocked.status_code == 429
        body = blocked.json()
        assert body["message"].startswith("Too many attempts.")
        assert body["request_id"] == blocked.headers["X-Request-ID"]
