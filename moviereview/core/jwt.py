# moviereview/core/jwt.py
from __future__ import annotations

"""
MovieReview — JWT verification
==============================
- `verify_token` returns a `TokenVerification` result instead of raising, so
  callers branch on `result.ok` and map `result.error` to their own response.
- Token extraction from the `accessToken` cookie, falling back to a
  case-insensitive `Authorization: Bearer <token>` header.

Notes
-----
- Token *creation* lives in `moviereview.core.security`.
- Standard `exp`/`nbf`/`iat` checks are done by python-jose.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import logging

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError
from pydantic import ValidationError as PydanticValidationError
from starlette.requests import Request

from moviereview.core.config import settings
from moviereview.core.security import ACCESS_TOKEN_TYPE, secret_for
from moviereview.schemas.auth import TokenPayload

logger = logging.getLogger("moviereview.auth")


class TokenError(str, Enum):
    MALFORMED = "malformed"
    EXPIRED = "expired"
    INVALID_SIGNATURE = "invalid_signature"
    INVALID_CLAIMS = "invalid_claims"
    WRONG_TYPE = "wrong_type"


@dataclass(frozen=True)
class TokenVerification:
    """Outcome of verifying a token: exactly one of `identity` / `error` is set."""

    identity: Optional[TokenPayload] = None
    error: Optional[TokenError] = None

    @property
    def ok(self) -> bool:
        return self.identity is not None and self.error is None

    @classmethod
    def success(cls, identity: TokenPayload) -> "TokenVerification":
        return cls(identity=identity)

    @classmethod
    def failure(cls, error: TokenError) -> "TokenVerification":
        return cls(error=error)


# ─────────────────────────────────────────────────────────────
# 🔓 Verify a token (signature, expiry, type, identity)
# ─────────────────────────────────────────────────────────────
def verify_token(token: Optional[str], *, expected_type: str = ACCESS_TOKEN_TYPE) -> TokenVerification:
    """Decode and validate a signed token.

    Checks
    ------
    1) Signature and standard claims (exp/nbf/iat)
    2) `token_type` equals `expected_type`
    3) `sub` and `jti` present, `sub` is an integer user id
    """
    if not token or not isinstance(token, str):
        return TokenVerification.failure(TokenError.MALFORMED)

    try:
        claims = jwt.decode(token, secret_for(expected_type), algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        logger.info("Token expired.")
        return TokenVerification.failure(TokenError.EXPIRED)
    except JWTClaimsError as e:
        logger.warning(f"JWT claims rejected: {e}")
        return TokenVerification.failure(TokenError.INVALID_CLAIMS)
    except JWTError as e:
        # python-jose folds bad signatures and undecodable segments into JWTError
        reason = TokenError.INVALID_SIGNATURE if "signature" in str(e).lower() else TokenError.MALFORMED
        logger.warning(f"JWT decoding failed: {e}")
        return TokenVerification.failure(reason)

    if claims.get("token_type") != expected_type:
        logger.warning(f"Token type mismatch: got {claims.get('token_type')!r}, expected {expected_type!r}")
        return TokenVerification.failure(TokenError.WRONG_TYPE)

    try:
        identity = TokenPayload(**claims)
        int(identity.sub)
    except (PydanticValidationError, TypeError, ValueError):
        logger.warning("Token payload missing or malformed identity claims.")
        return TokenVerification.failure(TokenError.MALFORMED)

    return TokenVerification.success(identity)


# ─────────────────────────────────────────────────────────────
# 📥 Extract the access token from a request
# ─────────────────────────────────────────────────────────────
def get_bearer_token(request: Request) -> Optional[str]:
    """Return the Bearer token from the `Authorization` header, if well-formed."""
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.warning("Malformed Authorization header.")
        return None
    return parts[1].strip() or None


def extract_token(request: Request) -> Optional[str]:
    """Access token from the auth cookie, else from the Authorization header."""
    return request.cookies.get(settings.ACCESS_TOKEN_COOKIE) or get_bearer_token(request)


__all__ = [
    "TokenError",
    "TokenVerification",
    "verify_token",
    "get_bearer_token",
    "extract_token",
]
