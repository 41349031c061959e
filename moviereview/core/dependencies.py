# moviereview/core/dependencies.py
from __future__ import annotations

"""
Request dependencies — the auth gate
====================================

`get_current_identity` is the single per-request check in front of every
protected route:

1) no token in the `accessToken` cookie (or Bearer header) → **401**
2) token fails verification                                → **403**
3) otherwise the decoded identity is attached to `request.state` and returned

Token decoding lives in `moviereview.core.jwt`; this module only *uses* it.
"""

import logging

from fastapi import Request

from moviereview.core.exceptions import AuthError, ForbiddenError
from moviereview.core.jwt import extract_token, verify_token
from moviereview.core.security import ACCESS_TOKEN_TYPE
from moviereview.schemas.auth import TokenPayload

logger = logging.getLogger(__name__)

__all__ = ["get_current_identity"]


async def get_current_identity(request: Request) -> TokenPayload:
    """Authenticate the request from its access token (no DB round trip)."""
    token = extract_token(request)
    if not token:
        raise AuthError("Unauthorized")

    result = verify_token(token, expected_type=ACCESS_TOKEN_TYPE)
    if not result.ok:
        logger.info(f"[Auth] rejected token: {result.error.value if result.error else 'unknown'}")
        raise ForbiddenError("Forbidden", details={"reason": result.error.value if result.error else None})

    identity = result.identity
    request.state.identity = identity
    request.state.user_id = identity.user_id  # rate-limit key
    return identity
