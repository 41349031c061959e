from __future__ import annotations

"""
🎬 MovieReview — Movie (catalogue entry)
=======================================

Read-only reference data for the API: movies are seeded out of band
(`scripts/seed_movies.py`) and only ever read by request handlers.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from moviereview.db.base_class import Base, PKMixin, TimestampMixin

if TYPE_CHECKING:  # pragma: no cover
    from moviereview.db.models.review import Review


class Movie(PKMixin, TimestampMixin, Base):
    __tablename__ = "movies"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    genre: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    release_year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    director: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    poster_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        Index("ix_movies_title", "title"),
        Index("ix_movies_release_year", "release_year"),
    )

    reviews: Mapped[List["Review"]] = relationship(
        "Review",
        back_populates="movie",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Review.id",
    )
