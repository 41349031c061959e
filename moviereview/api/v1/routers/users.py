"""
Users API — registration, login, current user
=============================================

POST /register
    Create an account. 201 `{user}`; 400 on missing/blank fields; 409 when the
    username (any case) or email is taken.

POST /login
    Email **or** username + password. 200 `{user, accessToken, refreshToken}`
    and both tokens as HttpOnly cookies; 400 / 401 / 404 on failure.

GET /currentuser
    The authenticated user's profile (auth gate required).

Security
--------
- Token- and PII-bearing responses are marked **no-store**.
- Per-route rate limits on the unauthenticated endpoints.
- Business logic lives in `moviereview.services.user_service`.
"""

from fastapi import APIRouter, Body, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from moviereview.api.http_utils import set_auth_cookies, set_sensitive_cache
from moviereview.core.dependencies import get_current_identity
from moviereview.core.limiter import rate_limit
from moviereview.db.session import get_async_db
from moviereview.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    TokenPayload,
)
from moviereview.schemas.user import CurrentUserResponse, UserOut
from moviereview.services.user_service import get_current_user, login_user, register_user

router = APIRouter(tags=["Users"])


# ──────────────────────────────────────────────────────
# 👤 Register
# ──────────────────────────────────────────────────────
@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
@rate_limit("10/minute")
async def register(
    request: Request,
    response: Response,
    payload: RegisterRequest = Body(...),
    db: AsyncSession = Depends(get_async_db),
) -> RegisterResponse:
    """Create an account; the password is hashed and never returned."""
    set_sensitive_cache(response)
    user = await register_user(payload, db)
    return RegisterResponse(user=UserOut.model_validate(user))


# ──────────────────────────────────────────────────────
# 🔐 Login
# ──────────────────────────────────────────────────────
@router.post("/login", response_model=LoginResponse, summary="Email/username + password login")
@rate_limit("10/minute")
async def login(
    request: Request,
    response: Response,
    payload: LoginRequest = Body(...),
    db: AsyncSession = Depends(get_async_db),
) -> LoginResponse:
    """Authenticate and issue an access + refresh token pair.

    Tokens are returned in the body and as cookies (HttpOnly; Secure outside
    development). The stored refresh token is never echoed inside `user`.
    """
    # [Step 0] Cache hardening
    set_sensitive_cache(response)

    # [Step 1] Delegate to service (lookup, password check, token issue + persist)
    result = await login_user(payload, db)

    # [Step 2] Cookies ride on the injected response
    set_auth_cookies(response, access_token=result.access_token, refresh_token=result.refresh_token)

    return LoginResponse(
        user=UserOut.model_validate(result.user),
        access_token=result.access_token,
        refresh_token=result.refresh_token,
    )


# ──────────────────────────────────────────────────────
# 🙋 Current user
# ──────────────────────────────────────────────────────
@router.get("/currentuser", response_model=CurrentUserResponse, summary="Get the authenticated user")
async def current_user(
    response: Response,
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_db),
) -> CurrentUserResponse:
    set_sensitive_cache(response)
    user = await get_current_user(identity, db)
    return CurrentUserResponse(user=UserOut.model_validate(user))


__all__ = ["router", "register", "login", "current_user"]
