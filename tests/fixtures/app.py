# tests/fixtures/app.py

"""
🧩 App Fixture:
- Builds the production app via `create_app()`
- Injects the test-specific DB session
- Returns an HTTP client fixture for integration tests
"""

from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from moviereview.db.session import get_async_db
from moviereview.main import create_app
from tests.fixtures.db import get_override_get_db


@pytest.fixture()
async def app(db_session: AsyncSession) -> FastAPI:
    """
    🧪 The real application (middleware, handlers, routers) bound to the test session.
    """
    app = create_app()
    app.dependency_overrides[get_async_db] = get_override_get_db(db_session)
    return app


@pytest.fixture()
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    🌐 Provides an HTTP client for sending requests to the test app.
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture()
def ratelimit_on(monkeypatch):
    """
    🚦 Turns the per-route SlowAPI limits back on for one test, with clean counters.
    """
    from moviereview.core import limiter as limiter_module

    monkeypatch.setenv("RATE_LIMIT_ENABLED", "true")
    monkeypatch.delenv("RATE_LIMIT_TEST_BYPASS", raising=False)
    monkeypatch.setattr(limiter_module.limiter, "enabled", True)
    limiter_module.limiter.reset()
    yield limiter_module.limiter
    limiter_module.limiter.reset()
