"""
MovieReview — SQLAlchemy Base registry
======================================

Import all ORM models so their tables are registered on `Base.metadata`
(Alembic autogeneration, `create_all` in tests).

Tip: Keep this file import-only; no runtime logic.
"""

from moviereview.db.base_class import Base

from moviereview.db.models.user import User
from moviereview.db.models.movie import Movie
from moviereview.db.models.review import Review

__all__ = [
    "Base",
    "User",
    "Movie",
    "Review",
]
