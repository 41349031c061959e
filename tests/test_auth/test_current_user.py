# tests/test_auth/test_current_user.py

import pytest
from fastapi import status
from httpx import AsyncClient

from moviereview.core.security import create_access_token, create_refresh_token
from tests.fixtures.users import auth_cookie
from tests.utils.factory import DEFAULT_PASSWORD

ME_URL = "/api/v1/currentuser"


@pytest.mark.anyio
async def test_current_user_via_cookie(async_client: AsyncClient, user_with_token, auth_headers):
    user, _ = user_with_token
    resp = await async_client.get(ME_URL, headers=auth_headers)

    assert resp.status_code == status.HTTP_200_OK, resp.text
    data = resp.json()["user"]
    assert data["id"] == user.id
    assert data["email"] == user.email
    assert "refreshToken" not in data


@pytest.mark.anyio
async def test_current_user_via_bearer_header(async_client: AsyncClient, user_with_token):
    user, token = user_with_token
    resp = await async_client.get(ME_URL, headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == status.HTTP_200_OK
    assert resp.json()["user"]["id"] == user.id


@pytest.mark.anyio
async def test_login_cookie_authenticates_follow_up_request(async_client: AsyncClient, create_test_user):
    user = await create_test_user()
    login = await async_client.post("/api/v1/login", json={"email": user.email, "password": DEFAULT_PASSWORD})
    token = login.json()["accessToken"]

    resp = await async_client.get(ME_URL, headers=auth_cookie(token))
    assert resp.status_code == status.HTTP_200_OK
    assert resp.json()["user"]["username"] == user.username


# ──────────────────────────────────────────────────────────────────────────────
# 🚧 Auth gate
# ──────────────────────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_no_token_is_unauthorized(async_client: AsyncClient):
    resp = await async_client.get(ME_URL)
    assert resp.status_code == status.HTTP_401_UNAUTHORIZED
    assert resp.json()["detail"] == "Unauthorized"


@pytest.mark.anyio
async def test_garbage_token_is_forbidden(async_client: AsyncClient):
    resp = await async_client.get(ME_URL, headers=auth_cookie("not-a-token"))
    assert resp.status_code == status.HTTP_403_FORBIDDEN
    assert resp.json()["detail"] == "Forbidden"


@pytest.mark.anyio
async def test_refresh_token_is_not_an_access_token(async_client: AsyncClient, user_with_token):
    user, _ = user_with_token
    resp = await async_client.get(ME_URL, headers=auth_cookie(create_refresh_token(user.id)))
    assert resp.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.anyio
async def test_valid_token_for_missing_user(async_client: AsyncClient):
    resp = await async_client.get(ME_URL, headers=auth_cookie(create_access_token(987654)))
    assert resp.status_code == status.HTTP_404_NOT_FOUND
    assert resp.json()["detail"] == "User not found"
