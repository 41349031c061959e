# moviereview/core/logger.py
from __future__ import annotations

"""
MovieReview — Logging (Loguru)
------------------------------
Importing this module configures Loguru once for the process:

- console sink, pretty by default or one JSON object per line (`LOG_JSON=1`)
- every record carries `request_id` (bound by `RequestIDMiddleware`, "N/A" outside a request)
- `extra` values under credential-like keys are masked before any sink sees them
- stdlib loggers (uvicorn, fastapi, starlette, moviereview.*) are routed into Loguru
- optional rotating file sink

Env
---
LOG_LEVEL      INFO|DEBUG|WARNING|ERROR (default: INFO)
LOG_JSON       1 → JSON lines
LOG_TO_FILE    1 → also write LOG_DIR/LOG_FILE (default: 0)
LOG_DIR        default: logs
LOG_FILE       default: moviereview.log
LOG_ROTATION   default: 10 MB
APP_DEBUG      1 → backtrace/diagnose on the console sink
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging
import os
import sys

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}
_REDACTED = "***"
SENSITIVE_KEYS = frozenset(
    {"password", "hashed_password", "access_token", "refresh_token", "token", "authorization", "cookie"}
)
INTERCEPTED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi", "starlette", "moviereview")


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    json: bool = False
    debug: bool = False
    to_file: bool = False
    file_path: Path = Path("logs") / "moviereview.log"
    rotation: str = "10 MB"

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
            json=_env_flag("LOG_JSON"),
            debug=_env_flag("APP_DEBUG"),
            to_file=_env_flag("LOG_TO_FILE"),
            file_path=Path(os.getenv("LOG_DIR", "logs")) / os.getenv("LOG_FILE", "moviereview.log"),
            rotation=os.getenv("LOG_ROTATION", "10 MB"),
        )


# ─────────────────────────────────────────────────────────────
# 🧽 Record patching
# ─────────────────────────────────────────────────────────────
def _patch_record(record) -> None:
    extra = record["extra"]
    extra.setdefault("request_id", "N/A")
    for key in list(extra):
        if key.lower() in SENSITIVE_KEYS:
            extra[key] = _REDACTED


# ─────────────────────────────────────────────────────────────
# 🧾 Formats
# ─────────────────────────────────────────────────────────────
PRETTY_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level> | request_id={extra[request_id]}"
)


def _json_format(record) -> str:
    doc: Dict[str, Any] = {
        "time": record["time"].isoformat(),
        "level": record["level"].name,
        "logger": record["name"],
        "func": record["function"],
        "line": record["line"],
        "message": record["message"],
    }
    doc.update({k: v for k, v in record["extra"].items() if k != "_json"})
    if record["exception"] is not None:
        doc["exception"] = repr(record["exception"].value)
    # Pre-rendered so braces inside the payload are not re-parsed as a template
    record["extra"]["_json"] = json.dumps(doc, ensure_ascii=False, default=str)
    return "{extra[_json]}\n"


# ─────────────────────────────────────────────────────────────
# 🔁 stdlib → Loguru
# ─────────────────────────────────────────────────────────────
class InterceptHandler(logging.Handler):
    """Forward stdlib records to Loguru, attributing them to the original caller."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: Any = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(config: Optional[LoggingConfig] = None) -> LoggingConfig:
    """(Re)install all sinks and stdlib interception; safe to call repeatedly."""
    config = config or LoggingConfig.from_env()
    fmt = _json_format if config.json else PRETTY_FORMAT

    logger.remove()
    logger.configure(patcher=_patch_record)
    logger.add(
        sys.stdout,
        level=config.level,
        format=fmt,
        enqueue=True,
        backtrace=config.debug,
        diagnose=config.debug,
    )
    if config.to_file:
        config.file_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(config.file_path),
            level=config.level,
            format=fmt,
            rotation=config.rotation,
            enqueue=True,
            backtrace=False,
            diagnose=False,
        )

    for name in INTERCEPTED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.setLevel(config.level)
        std_logger.propagate = False

    return config


LOGGING = configure_logging()

__all__ = ["LoggingConfig", "InterceptHandler", "configure_logging", "LOGGING", "SENSITIVE_KEYS"]
