"""
CampusHub Backend — Project Listing Endpoint Tests
====================================================

What we test:
    ✅ A logged-in user's project is owned by that user (session principal)
    ✅ No cookie, tampered cookie or revoked cookie → 401 and nothing created
    ✅ Owner fields in the body are ignored
    ✅ /listings is public and newest first
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from campushub.database import get_db_session
from campushub.models.project import Project


def tamper(token: str) -> str:
    return token[:-1] + ("A" if token[-1] != "A" else "B")


async def project_count(session_factory) -> int:
    async with session_factory() as session:
        return (await session.execute(select(func.count()).select_from(Project))).scalar_one()


PROJECT = {"name": "Robot", "desc": "Build a line follower", "num": 3, "type": "hardware"}


class TestMakeProject:

    @pytest.mark.asyncio
    async def test_owner_is_session_principal(self, api):
        token = await api.signup_and_login()
        me = (await api.request("POST", "/login", json={"username": "alice", "password": "p1"})).json()["user"]

        response = await api.request("POST", "/makeproj", token=token, json=PROJECT)

        assert response.status_code == 201
        assert response.json()["status"] == "success"

        listings = (await api.request("GET", "/listings")).json()
        assert len(listings) == 1
        assert listings[0]["createdBy"] == me["id"]
        assert listings[0]["name"] == "Robot"
        assert listings[0]["num"] == 3

    @pytest.mark.asyncio
    async def test_no_cookie_is_unauthorized(self, api, session_factory):
        response = await api.request("POST", "/makeproj", json=PROJECT)

        assert response.status_code == 401
        body = response.json()
        assert body["status"] == "error"
        assert body["error"] == "unauthorized"
        assert await project_count(session_factory) == 0

    @pytest.mark.asyncio
    async def test_tampered_cookie_is_unauthorized(self, api, session_factory):
        token = await api.signup_and_login()

        response = await api.request("POST", "/makeproj", token=tamper(token), json=PROJECT)

        assert response.status_code == 401
        assert await project_count(session_factory) == 0

    @pytest.mark.asyncio
    async def test_garbage_cookie_is_unauthorized(self, api, session_factory):
        response = await api.request("POST", "/makeproj", token="not-a-session", json=PROJECT)

        assert response.status_code == 401
        assert await project_count(session_factory) == 0

    @pytest.mark.asyncio
    async def test_unauthorized_wins_over_invalid_body(self, api):
        response = await api.request("POST", "/makeproj", json={"num": "lots"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_body_cannot_choose_owner(self, api):
        alice = await api.signup_and_login()
        await api.signup(username="bob", email="b@x.com", firstname="Bob")
        bob_id = (await api.request(
            "POST", "/login", json={"username": "bob", "password": "p1"}
        )).json()["user"]["id"]

        response = await api.request(
            "POST", "/makeproj", token=alice, json={**PROJECT, "createdBy": bob_id, "userId": bob_id}
        )

        assert response.status_code == 201
        listing = (await api.request("GET", "/listings")).json()[0]
        assert listing["createdBy"] != bob_id

    @pytest.mark.asyncio
    async def test_invalid_payload(self, api):
        token = await api.signup_and_login()

        response = await api.request("POST", "/makeproj", token=token, json={"desc": "no name"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert "name" in body["details"]


class TestListings:

    @pytest.mark.asyncio
    async def test_empty(self, api):
        response = await api.request("GET", "/listings")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_newest_first(self, api):
        token = await api.signup_and_login()
        for name in ("first", "second", "third"):
            await api.request("POST", "/makeproj", token=token, json={"name": name})

        names = [p["name"] for p in (await api.request("GET", "/listings")).json()]

        assert names == ["third", "second", "first"]

    @pytest.mark.asyncio
    async def test_store_unavailable(self, app, client, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        async def broken_db():
            yield mock_db_session

        app.dependency_overrides[get_db_session] = broken_db

        response = await client.get("/listings")

        assert response.status_code == 503
        body = response.json()
        assert body["error"] == "store_unavailable"
        assert "down" not in body["message"]
