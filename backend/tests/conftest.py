"""Test fixtures: a fresh app (and so fresh in-memory stores) per test.

Unit tests drive the stores and the token service directly with a
controllable clock; API tests go through the real auth pipeline with an
httpx client on the ASGI transport.
"""

from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notevault.config import Settings
from notevault.main import create_app

TEST_SECRET = "test-secret-not-for-production"


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def app_settings():
    return Settings(
        token_secret=TEST_SECRET,
        enable_rate_limiting=False,
        log_level="WARNING",
    )


@pytest.fixture()
def app(app_settings):
    return create_app(app_settings)


@pytest_asyncio.fixture()
async def client(app):
    """HTTP client against a freshly built app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def register_and_auth(client, username, password):
    """Register (or log in, if already registered) and return auth headers."""
    r = await client.post(
        "/api/v1/auth/register",
        json={"username": username, "password": password},
    )
    if r.status_code == 409:
        r = await client.post(
            "/api/v1/auth/login",
            json={"username": username, "password": password},
        )
    assert r.status_code in (200, 201), r.text
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest_asyncio.fixture()
async def auth_header(client):
    """Auth headers for alice."""
    return await register_and_auth(client, "alice", "secret123")


@pytest_asyncio.fixture()
async def second_auth_header(client):
    """Auth headers for bob."""
    return await register_and_auth(client, "bob", "hunter2000")
