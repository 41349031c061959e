from __future__ import annotations

from typing import Awaitable, Callable, Dict

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from moviereview.core.config import settings
from moviereview.core.security import create_access_token
from moviereview.db.models.user import User
from tests.utils.factory import create_user


# ──────────────────────────────────────────────────────────────
# 🧪 Factory: Create Test User
# ──────────────────────────────────────────────────────────────
@pytest.fixture
def create_test_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """
    Create and commit a user; kwargs are passed to `tests.utils.factory.create_user`.
    """
    async def _create(**kwargs) -> User:
        user = await create_user(session=db_session, **kwargs)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _create


# ──────────────────────────────────────────────────────────────
# 🔑 User + access token
# ──────────────────────────────────────────────────────────────
@pytest.fixture
async def user_with_token(create_test_user) -> tuple[User, str]:
    user = await create_test_user()
    return user, create_access_token(user.id)


def auth_cookie(token: str) -> Dict[str, str]:
    """Request headers carrying `token` in the access-token cookie."""
    return {"Cookie": f"{settings.ACCESS_TOKEN_COOKIE}={token}"}


@pytest.fixture
def auth_headers(user_with_token) -> Dict[str, str]:
    """Cookie header authenticating as `user_with_token`."""
    _, token = user_with_token
    return auth_cookie(token)


__all__ = ["create_test_user", "user_with_token", "auth_headers", "auth_cookie"]
