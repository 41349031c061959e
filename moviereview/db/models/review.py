from __future__ import annotations

"""
⭐ MovieReview — Review (user ratings & comments)
================================================

A user's rating and text for a `Movie`.

Highlights
----------
• `rating` is an **integer 1..10**.
• No uniqueness on (user, movie): a user may review the same movie more than once.
• Deleting a movie or a user cascades to its reviews.

Relationships
-------------
• `Review.user`  ↔ `User.reviews`
• `Review.movie` ↔ `Movie.reviews`
"""

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, SmallInteger, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from moviereview.db.base_class import Base, PKMixin, PKType, TimestampMixin

if TYPE_CHECKING:  # pragma: no cover
    from moviereview.db.models.movie import Movie
    from moviereview.db.models.user import User


class Review(PKMixin, TimestampMixin, Base):
    __tablename__ = "reviews"

    # ── Ownership ───────────────────────────────────────────────────────────
    movie_id: Mapped[int] = mapped_column(
        PKType, ForeignKey("movies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[int] = mapped_column(
        PKType, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
        doc="Author of the review.",
    )

    # ── Core review fields ──────────────────────────────────────────────────
    review_text: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int] = mapped_column(SmallInteger, nullable=False, doc="User rating, integer 1..10.")

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 10", name="rating_range"),
        Index("ix_reviews_movie_created", "movie_id", "created_at"),
    )

    # ── Relationships ──────────────────────────────────────────────────────
    user: Mapped["User"] = relationship("User", back_populates="reviews")
    movie: Mapped["Movie"] = relationship("Movie", back_populates="reviews")
