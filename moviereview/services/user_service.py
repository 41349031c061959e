# moviereview/services/user_service.py
from __future__ import annotations

"""
User service — registration, login, current user
================================================

Core implementation of the account flows, kept separate from the API layer.
Routes hand in an explicit `AsyncSession`; nothing here touches a global client.

Key behaviors
-------------
- **Registration**: every field required (whitespace counts as empty),
  duplicate pre-check on `lower(username)` OR exact email,
  bcrypt hashing, username stored lower-cased.
- **Race-safe duplicates**: the pre-check is not transactional; a unique-index
  violation on insert is still reported as a 409.
- **Login**: by email or username; issues an access + refresh token pair and
  persists the refresh token on the user row.
- **Errors**: only `SQLAlchemyError` is caught here (→ `InternalError`);
  typed errors propagate to the shared problem+json handlers.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from loguru import logger
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from moviereview.core.exceptions import (
    AuthError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from moviereview.core.security import (
    create_access_token,
    create_refresh_token,
    get_password_hash,
    verify_password,
)
from moviereview.db.models.user import User
from moviereview.schemas.auth import LoginRequest, RegisterRequest, TokenPayload

def _blank(value: Optional[str]) -> bool:
    return not (value or "").strip()


@dataclass(frozen=True)
class LoginResult:
    user: User
    access_token: str
    refresh_token: str


# ─────────────────────────────────────────────────────────────
# 📝 Register
# ─────────────────────────────────────────────────────────────
async def register_user(payload: RegisterRequest, db: AsyncSession) -> User:
    """Create a new account.

    Steps
    -----
    1) **Validate** all fields present (non-blank) → 400.
    2) **Check duplicates** (case-insensitive username, exact email) → 409.
    3) **Hash** the password (bcrypt).
    4) **Persist** the user → 500 on storage failure, 409 on a unique race.
    """
    # 1) Validate
    if any(_blank(v) for v in (payload.full_name, payload.email, payload.username, payload.password)):
        raise ValidationError("All fields are required")

    email = payload.email.strip()
    username = payload.username.strip().lower()

    # 2) Duplicate pre-check
    try:
        existing = (
            await db.execute(
                select(User.id).where(or_(func.lower(User.username) == username, User.email == email)).limit(1)
            )
        ).scalar_one_or_none()
    except SQLAlchemyError:
        logger.exception("Duplicate check failed during registration")
        raise InternalError("Something went wrong while registering the user")

    if existing is not None:
        logger.info("Registration rejected: username or email already taken")
        raise ConflictError("User with email or username already exists")

    # 3) Hash
    hashed_password = get_password_hash(payload.password)

    # 4) Persist
    user = User(
        full_name=payload.full_name.strip(),
        email=email,
        username=username,
        hashed_password=hashed_password,
    )
    try:
        db.add(user)
        await db.commit()
        await db.refresh(user)
    except IntegrityError:
        await db.rollback()
        logger.info("Registration lost a uniqueness race")
        raise ConflictError("User with email or username already exists")
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to persist new user")
        raise InternalError("Something went wrong while registering the user")

    logger.info("User registered | user_id={}", user.id)
    return user


# ─────────────────────────────────────────────────────────────
# 🎟️ Issue + persist tokens
# ─────────────────────────────────────────────────────────────
async def generate_access_and_refresh_tokens(db: AsyncSession, user_id: int) -> Tuple[str, str]:
    """Issue both tokens for `user_id` and store the refresh token on the user."""
    try:
        user = await db.get(User, user_id)
    except SQLAlchemyError:
        logger.exception("User lookup failed while issuing tokens")
        raise InternalError("Something went wrong while generating refresh and access tokens")
    if user is None:
        raise NotFoundError("User not found")

    access_token = create_access_token(user_id)
    refresh_token = create_refresh_token(user_id)

    try:
        user.refresh_token = refresh_token
        await db.commit()
        await db.refresh(user)
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to persist refresh token")
        raise InternalError("Something went wrong while generating refresh and access tokens")

    return access_token, refresh_token


# ─────────────────────────────────────────────────────────────
# 🔐 Login
# ─────────────────────────────────────────────────────────────
async def login_user(payload: LoginRequest, db: AsyncSession) -> LoginResult:
    """Authenticate by email or username + password.

    Errors
    ------
    400 when neither identifier is supplied, 404 when no user matches,
    401 when the password does not verify.
    """
    email = (payload.email or "").strip()
    username = (payload.username or "").strip().lower()
    if not email and not username:
        raise ValidationError("Username or Email is required")

    clauses = []
    if username:
        clauses.append(func.lower(User.username) == username)
    if email:
        clauses.append(User.email == email)

    try:
        user = (await db.execute(select(User).where(or_(*clauses)).limit(1))).scalar_one_or_none()
    except SQLAlchemyError:
        logger.exception("User lookup failed during login")
        raise InternalError("Internal server error")

    if user is None:
        raise NotFoundError("User does not exist")

    if not verify_password(payload.password, user.hashed_password):
        logger.info("Login failed: invalid password | user_id={}", user.id)
        raise AuthError("Invalid user credentials")

    access_token, refresh_token = await generate_access_and_refresh_tokens(db, user.id)
    logger.info("User logged in | user_id={}", user.id)
    return LoginResult(user=user, access_token=access_token, refresh_token=refresh_token)


# ─────────────────────────────────────────────────────────────
# 👤 Current user
# ─────────────────────────────────────────────────────────────
async def get_current_user(identity: TokenPayload, db: AsyncSession) -> User:
    """Load the user named by a verified token."""
    try:
        user = await db.get(User, identity.user_id)
    except SQLAlchemyError:
        logger.exception("Current-user lookup failed")
        raise InternalError("Internal server error")
    if user is None:
        raise NotFoundError("User not found")
    return user


__all__ = [
    "LoginResult",
    "register_user",
    "generate_access_and_refresh_tokens",
    "login_user",
    "get_current_user",
]
