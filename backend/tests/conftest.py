"""
CampusHub Backend — Test Configuration (conftest.py)
======================================================

Fixture Hierarchy (all function-scoped, so every test starts clean):
    ├── engine:          async engine on a fresh SQLite file with all tables
    ├── session_factory: sessionmaker bound to that engine
    ├── db:              one AsyncSession for service-level tests
    ├── mock_db_session: AsyncMock session for store-failure tests
    ├── app:             fresh create_app() with get_db_session overridden
    ├── client:          httpx AsyncClient over ASGITransport
    └── api:             ApiHelper with signup/login shortcuts
"""

import os
import tempfile

# Must be set before anything imports campushub.config
_TEST_DIR = tempfile.mkdtemp(prefix="campushub_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/import.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ENVIRONMENT"] = "development"
os.environ["PASSWORD_HASH_TIME_COST"] = "1"
os.environ["PASSWORD_HASH_MEMORY_COST"] = "1024"
os.environ["FRONTEND_DIST_PATH"] = os.path.join(_TEST_DIR, "no-frontend-build")

from typing import Any, AsyncGenerator, Dict, Optional  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient, Response  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

import campushub.models  # noqa: E402,F401
from campushub.config import settings  # noqa: E402
from campushub.database import Base, build_engine, get_db_session  # noqa: E402
from campushub.main import create_app  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def engine(tmp_path):
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'campushub.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    AsyncMock standing in for AsyncSession.

    Usage:
        mock_db_session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Application Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def app(session_factory):
    application = create_app()

    async def override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = override_db_session
    return application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client


def session_token_from(response: Response) -> Optional[str]:
    """Pull the session token out of a Set-Cookie header, if present."""
    for header in response.headers.get_list("set-cookie"):
        name, _, rest = header.partition("=")
        if name.strip() == settings.session_cookie_name:
            return rest.split(";", 1)[0]
    return None


class ApiHelper:
    """
    Shortcuts for the signup/login dance.

    Cookies are passed explicitly per request and the client's cookie jar is
    cleared after every call, so a request is anonymous unless a token is
    handed in.
    """

    def __init__(self, client: AsyncClient):
        self.client = client

    @staticmethod
    def signup_payload(**overrides: Any) -> Dict[str, Any]:
        payload = {
            "firstname": "Alice",
            "lastname": "Liddell",
            "username": "alice",
            "email": "a@x.com",
            "password": "p1",
            "campus": "North",
        }
        payload.update(overrides)
        return payload

    token_from = staticmethod(session_token_from)

    @staticmethod
    def cookie(token: str) -> Dict[str, str]:
        return {"Cookie": f"{settings.session_cookie_name}={token}"}

    async def request(self, method: str, url: str, token: Optional[str] = None, **kwargs) -> Response:
        headers = dict(kwargs.pop("headers", {}) or {})
        if token is not None:
            headers.update(self.cookie(token))
        response = await self.client.request(method, url, headers=headers, **kwargs)
        self.client.cookies.clear()
        return response

    async def signup(self, **overrides: Any) -> Response:
        return await self.request("POST", "/signup", json=self.signup_payload(**overrides))

    async def login(self, username: str = "alice", password: str = "p1", path: str = "/login") -> str:
        response = await self.request(
            "POST", path, json={"username": username, "password": password}
        )
        assert response.status_code == 200, response.text
        token = session_token_from(response)
        assert token
        return token

    async def signup_and_login(self, **overrides: Any) -> str:
        response = await self.signup(**overrides)
        assert response.status_code == 200, response.text
        payload = self.signup_payload(**overrides)
        return await self.login(payload["username"], payload["password"])


@pytest.fixture
def api(client) -> ApiHelper:
    return ApiHelper(client)


@pytest.fixture
def png_bytes() -> bytes:
    """Smallest valid PNG signature plus an IEND chunk; enough for upload tests."""
    return (
        b"\x89PNG\r\n\x1a\n"
        b"\x00\x00\x00\x00IEND\xaeB`\x82"
    )
