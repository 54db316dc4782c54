"""
CampusHub Backend — Signup / Login / Logout Endpoint Tests
============================================================

What we test:
    ✅ Signup contract: all six fields required, generic failures
    ✅ Login sets an HttpOnly, SameSite=Lax session cookie and never leaks
       which field was wrong
    ✅ /clublogin behaves exactly like /login
    ✅ Logging in again replaces the previous session
    ✅ Logout revokes the session and is idempotent
"""

import pytest

from campushub.config import settings


class TestSignup:

    @pytest.mark.asyncio
    async def test_signup_success(self, api):
        response = await api.signup()

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert "password" not in response.text
        assert "p1" not in response.text

    @pytest.mark.asyncio
    async def test_campus1_alias_accepted(self, api):
        payload = api.signup_payload()
        payload["campus1"] = payload.pop("campus")

        response = await api.request("POST", "/signup", json=payload)

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_form_encoded_signup(self, api):
        response = await api.request("POST", "/signup", data=api.signup_payload())

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_missing_campus_is_validation_failure(self, api):
        payload = api.signup_payload()
        del payload["campus"]

        response = await api.request("POST", "/signup", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "error"
        assert body["error"] == "validation_error"
        assert body["message"] == "Error during signup"
        # Nothing was stored
        login = await api.request("POST", "/login", json={"username": "alice", "password": "p1"})
        assert login.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_email(self, api):
        response = await api.signup(email="not-an-email")

        assert response.status_code == 400
        assert response.json()["status"] == "error"

    @pytest.mark.asyncio
    async def test_duplicate_username_is_generic_error(self, api):
        assert (await api.signup()).status_code == 200

        response = await api.signup(email="other@x.com")

        assert response.status_code == 409
        body = response.json()
        assert body["status"] == "error"
        assert body["error"] == "signup_failed"
        assert body["message"] == "Error during signup"
        assert "username" not in body["message"].lower()

    @pytest.mark.asyncio
    async def test_duplicate_does_not_change_original_password(self, api):
        await api.signup()
        await api.signup(email="other@x.com", password="p2")

        await api.login("alice", "p1")
        response = await api.request("POST", "/login", json={"username": "alice", "password": "p2"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_non_object_body(self, api):
        response = await api.request("POST", "/signup", json=["alice"])

        assert response.status_code == 400


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_sets_session_cookie(self, api):
        await api.signup()

        response = await api.request("POST", "/login", json={"username": "alice", "password": "p1"})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["message"] == "Welcome"
        assert body["user"]["username"] == "alice"
        assert "password" not in body["user"]
        assert "passwordHash" not in body["user"]

        cookie = response.headers["set-cookie"].lower()
        assert cookie.startswith(settings.session_cookie_name.lower() + "=")
        assert "httponly" in cookie
        assert "samesite=lax" in cookie
        assert "path=/" in cookie
        assert f"max-age={settings.session_ttl_seconds}" in cookie
        # Plain http in development
        assert "secure" not in cookie

    @pytest.mark.asyncio
    async def test_cookie_secure_in_production(self, api, monkeypatch):
        await api.signup()
        monkeypatch.setattr(settings, "environment", "production")

        response = await api.request("POST", "/login", json={"username": "alice", "password": "p1"})

        assert "secure" in response.headers["set-cookie"].lower()

    @pytest.mark.asyncio
    async def test_form_encoded_login(self, api):
        await api.signup()

        response = await api.request("POST", "/login", data={"username": "alice", "password": "p1"})

        assert response.status_code == 200
        assert api.token_from(response)

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_user_look_the_same(self, api):
        await api.signup()

        wrong = await api.request("POST", "/login", json={"username": "alice", "password": "nope"})
        unknown = await api.request("POST", "/login", json={"username": "mallory", "password": "p1"})

        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json()["error"] == unknown.json()["error"] == "auth_failed"
        assert wrong.json()["message"] == unknown.json()["message"]
        assert api.token_from(wrong) is None
        assert api.token_from(unknown) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"content": b"{not json", "headers": {"Content-Type": "application/json"}},
            {"json": {"username": "alice"}},
            {"json": {"username": ["alice"], "password": "p1"}},
            {"json": "alice:p1"},
            {"content": b"alice:p1", "headers": {"Content-Type": "text/plain"}},
        ],
    )
    async def test_malformed_body_is_auth_failure(self, api, kwargs):
        await api.signup()

        response = await api.request("POST", "/login", **kwargs)

        assert response.status_code == 401
        assert response.json()["error"] == "auth_failed"

    @pytest.mark.asyncio
    async def test_clublogin_is_login(self, api):
        await api.signup()

        token = await api.login(path="/clublogin")

        response = await api.request("POST", "/makeproj", token=token, json={"name": "Club project"})
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_login_again_replaces_previous_session(self, api):
        await api.signup()
        first = await api.login()

        response = await api.request(
            "POST", "/login", token=first, json={"username": "alice", "password": "p1"}
        )
        second = api.token_from(response)

        assert second and second != first
        old = await api.request("POST", "/makeproj", token=first, json={"name": "x"})
        new = await api.request("POST", "/makeproj", token=second, json={"name": "x"})
        assert old.status_code == 401
        assert new.status_code == 201


class TestLogout:

    @pytest.mark.asyncio
    async def test_logout_revokes_session(self, api):
        token = await api.signup_and_login()

        response = await api.request("POST", "/logout", token=token)

        assert response.status_code == 200
        assert response.json()["status"] == "success"
        assert "max-age=0" in response.headers["set-cookie"].lower()

        after = await api.request("POST", "/makeproj", token=token, json={"name": "x"})
        assert after.status_code == 401

    @pytest.mark.asyncio
    async def test_logout_without_session(self, api):
        response = await api.request("POST", "/logout")

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_logout_twice(self, api):
        token = await api.signup_and_login()

        await api.request("POST", "/logout", token=token)
        response = await api.request("POST", "/logout", token=token)

        assert response.status_code == 200
