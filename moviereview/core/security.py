# moviereview/core/security.py
from __future__ import annotations

"""
MovieReview — Authentication & Security Helpers
===============================================
- Password hashing via Passlib (bcrypt, configurable cost; 10 by default)
- Signed JWT creation for **access** and **refresh** tokens
- Decoding/verification lives in `moviereview.core.jwt`

Claims
------
Every token carries `sub` (user id as string), `exp`, `iat`, `nbf`, a random
`jti` and `token_type` (`"access"` | `"refresh"`). Refresh tokens are signed
with `JWT_REFRESH_SECRET_KEY` when configured, else with `JWT_SECRET_KEY`.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union
from uuid import uuid4
import logging

from jose import jwt
from passlib.context import CryptContext

from moviereview.core.config import settings

# ───────────────────────────────────────────────
# 🔐 Security Constants and Setup
# ───────────────────────────────────────────────
ALGORITHM: str = settings.JWT_ALGORITHM
ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)
logger = logging.getLogger("moviereview.security")


# ───────────────────────────────────────────────
# 🔐 Password Hashing Utilities
# ───────────────────────────────────────────────
def get_password_hash(password: str) -> str:
    """Return a salted bcrypt hash."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time verify of a plaintext password against a stored hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Unknown/garbled hash format: treat as a mismatch.
        logger.warning("Stored password hash could not be parsed")
        return False


def secret_for(token_type: str) -> str:
    """Signing key for a token type."""
    if token_type == REFRESH_TOKEN_TYPE:
        return settings.refresh_secret
    return settings.JWT_SECRET_KEY.get_secret_value()


def _build_claims(user_id: Union[int, str], token_type: str, lifetime: timedelta) -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    return {
        "sub": str(user_id),
        "exp": now + lifetime,
        "iat": now,
        "nbf": now,
        "jti": str(uuid4()),
        "token_type": token_type,
    }


# ───────────────────────────────────────────────
# 🪪 JWT — Access Token Generation
# ───────────────────────────────────────────────
def create_access_token(user_id: Union[int, str], expires_delta: Optional[timedelta] = None) -> str:
    """Create a short-lived signed **access token** for `user_id`."""
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = _build_claims(user_id, ACCESS_TOKEN_TYPE, lifetime)
    return jwt.encode(payload, secret_for(ACCESS_TOKEN_TYPE), algorithm=ALGORITHM)


# ───────────────────────────────────────────────
# 🎟️ JWT — Refresh Token Generation
# ───────────────────────────────────────────────
def create_refresh_token(user_id: Union[int, str], expires_delta: Optional[timedelta] = None) -> str:
    """Create a longer-lived signed **refresh token** for `user_id`."""
    lifetime = expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    payload = _build_claims(user_id, REFRESH_TOKEN_TYPE, lifetime)
    return jwt.encode(payload, secret_for(REFRESH_TOKEN_TYPE), algorithm=ALGORITHM)


__all__ = [
    "ACCESS_TOKEN_TYPE",
    "REFRESH_TOKEN_TYPE",
    "get_password_hash",
    "verify_password",
    "secret_for",
    "create_access_token",
    "create_refresh_token",
]
