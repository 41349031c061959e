# moviereview/main.py
from __future__ import annotations

"""
# MovieReview API — Application Entrypoint (FastAPI)

ASGI application factory and lifecycle for the movie-review backend.

## Middleware order
1) request id → 2) CORS (credentialed, cookie auth) → 3) rate limits.

## Probes
- `/healthz` — liveness (process up).
- `/readyz` — readiness (quick DB check).
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict
import logging
import os

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

# -- Logging bootstrap (Loguru + stdlib intercept) ----------------------------
from moviereview.core import logger as _logsetup  # noqa: F401

from moviereview.api.v1.routers import router as api_v1_router
from moviereview.core.config import settings
from moviereview.core.exception_handlers import (
    global_exception_handler,
    http_exception_handler,
    rate_limit_exceeded_handler,
    validation_exception_handler,
)
from moviereview.core.limiter import install_rate_limiter, rate_limit_exempt
from moviereview.db.session import async_engine, db_healthcheck
from moviereview.middleware.request_id import RequestIDMiddleware

logger = logging.getLogger("moviereview")


# ─────────────────────────────────────────────────────────────────────────────
# 🔄 Lifespan: startup & shutdown
# ─────────────────────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log a startup banner; dispose the DB engine on shutdown."""
    logger.info("✅ MovieReview API starting up (env=%s)", settings.ENV)
    try:
        yield
    finally:
        await async_engine.dispose()
        logger.info("🛑 Database engine disposed")
        logger.info("🛑 MovieReview API shutting down")


def _configure_cors(app: FastAPI) -> None:
    """Credentialed CORS: the browser client authenticates with cookies."""
    origins = list(settings.BACKEND_CORS_ORIGINS) or [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "OPTIONS", "POST"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID", "Retry-After"],
        max_age=3600,
    )


# ─────────────────────────────────────────────────────────────────────────────
# 🏗️ App factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app() -> FastAPI:
    """
    Build and configure the FastAPI app instance.

    Returns:
        FastAPI: application with middleware, exception handlers, the v1
        router and health/readiness endpoints.
    """
    enable_docs = settings.ENABLE_DOCS
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        docs_url="/docs" if enable_docs else None,
        redoc_url="/redoc" if enable_docs else None,
        openapi_url="/openapi.json" if enable_docs else None,
        lifespan=lifespan,
    )

    # ── Middlewares (last added runs first) ────────────────────────────────
    install_rate_limiter(app)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]
    _configure_cors(app)
    app.add_middleware(RequestIDMiddleware)

    # ── Exception handlers (problem+json) ───────────────────────────────────
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, global_exception_handler)  # type: ignore[arg-type]

    # ── Routers (versioned API) ─────────────────────────────────────────────
    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    # ── Meta endpoints ──────────────────────────────────────────────────────
    @app.get("/healthz", tags=["meta"])
    @rate_limit_exempt()
    async def healthz() -> Dict[str, bool]:
        """Liveness probe: `{"ok": true}` when the process is responsive."""
        return {"ok": True}

    @app.get("/readyz", tags=["meta"])
    @rate_limit_exempt()
    async def readyz() -> JSONResponse:
        """Readiness probe: 200 when the database answers, 503 otherwise."""
        db_ok = await db_healthcheck()
        return JSONResponse(
            {"ready": db_ok, "checks": {"db": db_ok}},
            status_code=200 if db_ok else 503,
        )

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        return JSONResponse(
            {"name": settings.PROJECT_NAME, "docs": app.docs_url or "", "version": settings.VERSION}
        )

    return app


# ─────────────────────────────────────────────────────────────────────────────
# 🚀 Module-level ASGI app for Uvicorn
# ─────────────────────────────────────────────────────────────────────────────
app = create_app()
__all__ = ["create_app", "app"]


# Local dev runner (prefer: `uvicorn moviereview.main:app --reload`)
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "moviereview.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD", "1") == "1",
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
