# tests/conftest.py
"""
Global test bootstrap
- Points the app at an isolated SQLite database (unless TEST_DATABASE_URL is set)
- Disables SlowAPI rate limiting for the suite
- Pins a test JWT secret and development cookie behavior
"""

from __future__ import annotations

import os
import tempfile

# ──────────────────────────────────────────────────────────────────────────────
# 🌱 Test env (set BEFORE importing moviereview so settings pick it up)
# ──────────────────────────────────────────────────────────────────────────────
_DEFAULT_DB = os.path.join(tempfile.gettempdir(), f"moviereview_test_{os.getpid()}.db")
os.environ.setdefault("TEST_DATABASE_URL", f"sqlite+aiosqlite:///{_DEFAULT_DB}")
os.environ["SQLALCHEMY_DATABASE_URI"] = os.environ["TEST_DATABASE_URL"]
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ["ENV"] = "development"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("RATELIMIT_STORAGE_URI", "memory://")
os.environ.setdefault("LOG_TO_FILE", "0")
os.environ.setdefault("LOG_LEVEL", "WARNING")

# ──────────────────────────────────────────────────────────────────────────────
# 📦 Pull in the fixtures (db, app, users, movies)
# ──────────────────────────────────────────────────────────────────────────────
from tests.fixtures.db import *        # noqa: F401,F403,E402
from tests.fixtures.app import *       # noqa: F401,F403,E402
from tests.fixtures.users import *     # noqa: F401,F403,E402
from tests.fixtures.movies import *    # noqa: F401,F403,E402
