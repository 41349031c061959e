# moviereview/core/exceptions.py
from __future__ import annotations

"""
MovieReview — Application Exceptions
====================================
A small, consistent layer on top of FastAPI/Starlette's `HTTPException` that
lets us attach structured metadata and integrate cleanly with the problem+json
shape rendered by `moviereview.core.exception_handlers`.

Key ideas
---------
- One base `AppException` that carries `code`, `details` and `extra`.
- One subclass per error kind the API exposes (400/401/403/404/409/500).
- Zero breaking changes for callers already catching `HTTPException`.

Usage
-----
    raise ConflictError("User with email or username already exists")
    raise NotFoundError("Movie not found", details={"id": movie_id})
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

__all__ = [
    "AppException",
    "ValidationError",
    "AuthError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "InternalError",
]


# ──────────────────────────────────────────────────────────────
# 📦 Core: AppException
# ──────────────────────────────────────────────────────────────
class AppException(HTTPException):
    """Base application-level exception with optional metadata.

    Attributes
    -----------
    status_code : int
        HTTP status code.
    message : str
        Human-readable error message (serialized as `detail` as well).
    code : int
        Optional internal/typed error code. Defaults to `status_code`.
    details : Any
        Machine-readable details (ids, field names).
    extra : dict
        Additional non-sensitive metadata to surface to clients.
    """

    default_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        code: Optional[int] = None,
        details: Optional[Any] = None,
        extra: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        status_code = int(status_code or self.default_status)
        message = message or self.default_message
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.code: int = int(code or status_code)
        self.message: str = message
        self.details: Optional[Any] = details
        self.extra: Dict[str, Any] = extra or {}

    def to_problem(self) -> Dict[str, Any]:
        """Return the extra members merged into the problem body."""
        body: Dict[str, Any] = {"code": self.code}
        if self.details is not None:
            body["details"] = self.details
        extra_sanitized = dict(self.extra)
        for k in ("token", "authorization", "password", "secret"):
            extra_sanitized.pop(k, None)
        body.update(extra_sanitized)
        return body


# ──────────────────────────────────────────────────────────────
# 🧾 Error taxonomy
# ──────────────────────────────────────────────────────────────
class ValidationError(AppException):
    """Missing or malformed input."""

    default_status = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthError(AppException):
    """Bad credentials or a missing token (401)."""

    default_status = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"

    def __init__(self, message: Optional[str] = None, **kwargs: Any) -> None:
        kwargs.setdefault("headers", {"WWW-Authenticate": "Bearer"})
        super().__init__(message, **kwargs)


class ForbiddenError(AppException):
    """A presented token failed verification, or the action is not allowed."""

    default_status = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(AppException):
    default_status = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppException):
    """Duplicate identity (username/email)."""

    default_status = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class InternalError(AppException):
    """Persistence or otherwise unexpected failure."""
