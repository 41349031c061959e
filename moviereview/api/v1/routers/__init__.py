"""
🧭 MovieReview • API v1 Router Aggregator
========================================

Exports the **combined `router`** and a `build_v1_router()` factory.

Quick usage
-----------
    from moviereview.api.v1.routers import router as v1_router
    app.include_router(v1_router, prefix="/api/v1")

Auth and rate limits live in the child routers; this layer only composes them.
"""

from fastapi import APIRouter

from moviereview.api.v1.routers.reviews import router as reviews_router
from moviereview.api.v1.routers.users import router as users_router


def build_v1_router() -> APIRouter:
    """Compose the v1 surface: user/auth endpoints and movie/review endpoints."""
    r = APIRouter()
    r.include_router(users_router)
    r.include_router(reviews_router)
    return r


router = build_v1_router()

__all__ = ["router", "build_v1_router", "users_router", "reviews_router"]
