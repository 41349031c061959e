from __future__ import annotations

"""
Problem+JSON exception handlers (RFC 7807).

`moviereview.main.create_app` registers these. All HTTP errors are rendered as
application/problem+json with a stable schema; request validation failures
are client errors and map to 400.
"""

from typing import Any, Dict

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from moviereview.core.exceptions import AppException
from moviereview.middleware.request_id import get_request_id


def _request_id(request: Request) -> str:
    return get_request_id(request) or "N/A"


def _problem(
    title: str,
    detail: str,
    status_code: int,
    request: Request,
    *,
    headers: Dict[str, str] | None = None,
    **members: Any,
) -> JSONResponse:
    content: Dict[str, Any] = {
        "type": "about:blank",
        "title": title,
        "detail": detail,
        "status": status_code,
        "instance": str(request.url),
        "request_id": _request_id(request),
    }
    content.update(members)
    return JSONResponse(
        status_code=status_code,
        content=content,
        headers=headers,
        media_type="application/problem+json",
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # type: ignore
    title = exc.__class__.__name__.replace("Exception", "").strip() or "Error"
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    headers = getattr(exc, "headers", None)
    members = exc.to_problem() if isinstance(exc, AppException) else {}
    return _problem(title, detail, exc.status_code, request, headers=headers, **members)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # type: ignore
    detail = "Validation error"
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in exc.errors()
    ]
    return _problem(detail, detail, status.HTTP_400_BAD_REQUEST, request, errors=errors)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:  # type: ignore
    response = _problem(
        "Too Many Requests",
        f"Rate limit exceeded: {exc.detail}",
        status.HTTP_429_TOO_MANY_REQUESTS,
        request,
    )
    # Retry-After / X-RateLimit-* from the limiter that tripped
    limiter = getattr(request.app.state, "limiter", None)
    current = getattr(request.state, "view_rate_limit", None)
    if limiter is not None and current is not None:
        response = limiter._inject_headers(response, current)
    return response


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # type: ignore
    logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
    return _problem(
        "Internal Server Error",
        "An unexpected error occurred.",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        request,
    )


__all__ = [
    "http_exception_handler",
    "validation_exception_handler",
    "rate_limit_exceeded_handler",
    "global_exception_handler",
]
