from __future__ import annotations

"""
MovieReview · HTTP Utilities
============================

Shared helpers for API routers:

- No-store cache headers for responses carrying tokens or PII
- Auth cookie helpers (access + refresh)
"""

from fastapi import Response

from moviereview.core.config import settings

__all__ = ["set_sensitive_cache", "set_auth_cookies"]


def set_sensitive_cache(response: Response) -> None:
    """Mark a response as non-cacheable (idempotent)."""
    response.headers.setdefault("Cache-Control", "no-store")
    response.headers.setdefault("Pragma", "no-cache")
    response.headers.setdefault("Expires", "0")


def set_auth_cookies(response: Response, *, access_token: str, refresh_token: str) -> None:
    """Deliver both tokens as cookies: always HttpOnly, Secure outside development."""
    options = {
        "httponly": True,
        "secure": settings.cookie_secure,
        "samesite": settings.COOKIE_SAMESITE,
        "path": "/",
    }
    response.set_cookie(
        settings.ACCESS_TOKEN_COOKIE,
        access_token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        **options,
    )
    response.set_cookie(
        settings.REFRESH_TOKEN_COOKIE,
        refresh_token,
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        **options,
    )
