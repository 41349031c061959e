# tests/test_settings.py

"""
🛠️ Test Settings:
Resolves the isolated test database URL.
"""

import os
import tempfile

from moviereview.core.config import Settings


class TestSettings(Settings):
    @property
    def TEST_DATABASE_URL(self) -> str:
        """
        `TEST_DATABASE_URL` from the environment, else a throwaway SQLite file
        (aiosqlite driver) in the temp directory.
        """
        url = os.getenv("TEST_DATABASE_URL", "").strip()
        if url:
            return url
        path = os.path.join(tempfile.gettempdir(), f"moviereview_test_{os.getpid()}.db")
        return f"sqlite+aiosqlite:///{path}"


# 👇 Used in all test DB fixtures
settings = TestSettings()
