from __future__ import annotations

"""
MovieReview — HTTP Rate Limiting (SlowAPI)
==========================================

- Keys: `user:<id>` once the auth gate has set `request.state.user_id`,
  otherwise `ip:<addr>`. X-Forwarded-For / X-Real-IP count only when the
  socket peer is a listed proxy; anyone else is keyed by the peer address.
- `/register` and `/login` carry tighter per-route limits via `rate_limit(...)`;
  everything else falls under `DEFAULT_RATE_LIMIT` through the middleware.
- Probes and docs are never limited.

Environment
-----------
RATE_LIMIT_ENABLED      default "true"; "false" leaves the middleware out entirely
DEFAULT_RATE_LIMIT      default "100/minute" (comma separated for several windows)
RATELIMIT_STORAGE_URI   default "memory://" (e.g. redis://host:6379/0)
RATE_LIMIT_SKIP_PATHS   default "/healthz,/readyz,/docs,/redoc,/openapi.json,/favicon.ico"
RATE_LIMIT_TRUSTED_IPS  comma separated, never limited
RATE_LIMIT_TRUSTED_PROXIES  comma separated peers whose forwarding headers are believed
RATE_LIMIT_TEST_BYPASS  truthy → every request exempt
"""

from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Optional, Tuple
import os

from dotenv import load_dotenv
from loguru import logger
from slowapi import Limiter
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.requests import Request

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def _csv(name: str, default: str = "") -> Tuple[str, ...]:
    return tuple(part.strip() for part in os.getenv(name, default).split(",") if part.strip())


@dataclass(frozen=True)
class RateLimitSettings:
    enabled: bool = True
    default_limits: Tuple[str, ...] = ("100/minute",)
    storage_uri: str = "memory://"
    skip_paths: Tuple[str, ...] = ()
    trusted_ips: FrozenSet[str] = field(default_factory=frozenset)
    trusted_proxies: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_env(cls) -> "RateLimitSettings":
        return cls(
            enabled=_flag("RATE_LIMIT_ENABLED", "true"),
            default_limits=_csv("DEFAULT_RATE_LIMIT", "100/minute"),
            storage_uri=os.getenv("RATELIMIT_STORAGE_URI", "").strip() or "memory://",
            skip_paths=_csv("RATE_LIMIT_SKIP_PATHS", "/healthz,/readyz,/docs,/redoc,/openapi.json,/favicon.ico"),
            trusted_ips=frozenset(_csv("RATE_LIMIT_TRUSTED_IPS")),
            trusted_proxies=frozenset(_csv("RATE_LIMIT_TRUSTED_PROXIES")),
        )


LIMITS = RateLimitSettings.from_env()


# ──────────────────────────────────────────────────────────────
# 🧠 Keying & exemptions
# ──────────────────────────────────────────────────────────────
def client_ip(request: Request) -> str:
    peer = get_remote_address(request) or "unknown"
    if peer not in LIMITS.trusted_proxies:
        return peer
    forwarded = (request.headers.get("x-forwarded-for") or "").split(",")[0].strip()
    if forwarded:
        return forwarded
    return (request.headers.get("x-real-ip") or "").strip() or peer


def get_user_rate_limit_key(request: Request) -> str:
    user_id = getattr(request.state, "user_id", None)
    return f"user:{user_id}" if user_id else f"ip:{client_ip(request)}"


def should_exempt_request(request: Optional[Request]) -> bool:
    """True when limiting is off (env is re-read per call), bypassed, or the request is a probe/trusted peer."""
    if not _flag("RATE_LIMIT_ENABLED", "true") or _flag("RATE_LIMIT_TEST_BYPASS", ""):
        return True
    if request is None:
        return False
    path = request.url.path
    if any(path == p or path.startswith(p.rstrip("/") + "/") for p in LIMITS.skip_paths):
        return True
    return client_ip(request) in LIMITS.trusted_ips


limiter = Limiter(
    key_func=get_user_rate_limit_key,
    default_limits=list(LIMITS.default_limits),
    headers_enabled=True,
    storage_uri=LIMITS.storage_uri,
    enabled=LIMITS.enabled,
)


# ──────────────────────────────────────────────────────────────
# 🎛 Route decorators
# ──────────────────────────────────────────────────────────────
def _exempt_when(request: Optional[Request] = None) -> bool:
    if request is None:
        # Older SlowAPI releases call this without arguments
        try:
            request = limiter._request_context.get()  # type: ignore[attr-defined]
        except (AttributeError, LookupError):
            request = None
    return should_exempt_request(request)


def rate_limit(*limits: str) -> Callable:
    """
    Per-route limits, e.g. `@rate_limit("10/minute")` under the router decorator.

    The endpoint must declare `request: Request` and `response: Response`.
    """
    selected = limits or LIMITS.default_limits

    def _apply(fn: Callable) -> Callable:
        for value in reversed(selected):
            fn = limiter.limit(value, exempt_when=_exempt_when)(fn)
        return fn

    return _apply


def rate_limit_exempt() -> Callable:
    return limiter.exempt


def install_rate_limiter(app) -> None:
    """Expose the limiter on `app.state`; add the middleware only when enabled."""
    app.state.limiter = limiter
    if LIMITS.enabled:
        app.add_middleware(SlowAPIMiddleware)
    logger.info(
        "Rate limiter {} | default={} | storage={}",
        "installed" if LIMITS.enabled else "disabled",
        ",".join(LIMITS.default_limits),
        LIMITS.storage_uri,
    )


__all__ = [
    "RateLimitSettings",
    "LIMITS",
    "limiter",
    "client_ip",
    "get_user_rate_limit_key",
    "should_exempt_request",
    "rate_limit",
    "rate_limit_exempt",
    "install_rate_limiter",
]
