from __future__ import annotations

"""
👤 MovieReview — User (accounts & auth)
======================================

Account entity storing login credentials, profile fields and the most recent
refresh token.

Design highlights
-----------------
• **Case-insensitive username uniqueness** (functional index on `lower(username)`);
  usernames are also stored lower-cased.
• **Exact email uniqueness** (plain unique constraint).
• **DB-driven, tz-aware timestamps** (`func.now()`; `timezone=True`).
• The refresh token is overwritten on each successful login; there is no
  separate session table.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import CheckConstraint, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from moviereview.db.base_class import Base, PKMixin, TimestampMixin

if TYPE_CHECKING:  # pragma: no cover
    from moviereview.db.models.review import Review


class User(PKMixin, TimestampMixin, Base):
    """Registered account. Never hard-deleted by the API."""

    __tablename__ = "users"

    # ── Identity & Authentication ─────────────────────────────────────────────
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    username: Mapped[str] = mapped_column(String(64), nullable=False)
    hashed_password: Mapped[str] = mapped_column(
        String(255), nullable=False, doc="BCrypt hash of the password"
    )
    refresh_token: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, doc="Latest refresh token issued at login"
    )

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        CheckConstraint("length(trim(email)) > 0", name="email_not_blank"),
        CheckConstraint("length(trim(username)) > 0", name="username_not_blank"),
    )

    # ── Relationships ───────────────────────────────────────────────────────
    reviews: Mapped[List["Review"]] = relationship(
        "Review",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"


Index("uq_users_username_lower", func.lower(User.username), unique=True)
