# moviereview/db/base_class.py
"""
Declarative base, naming convention and shared column types for the ORM models.

    from moviereview.db.base_class import Base, PKMixin, TimestampMixin

    class Movie(PKMixin, TimestampMixin, Base):
        __tablename__ = "movies"
        title: Mapped[str] = mapped_column(String(255))
"""

from datetime import datetime
from typing import Annotated

from sqlalchemy import BigInteger, DateTime, Integer, MetaData, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Deterministic constraint names; the Alembic revisions spell these out.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# BIGINT on PostgreSQL; SQLite only auto-increments INTEGER primary keys.
PKType = BigInteger().with_variant(Integer, "sqlite")

IntPK = Annotated[int, mapped_column(PKType, primary_key=True, autoincrement=True)]
CreatedAt = Annotated[
    datetime,
    mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False),
]
UpdatedAt = Annotated[
    datetime,
    mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False),
]


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    def __repr__(self) -> str:  # pragma: no cover
        # Only already-loaded attributes; never trigger a lazy load from repr
        shown = [f"{k}={self.__dict__[k]!r}" for k in ("id", "username", "title", "movie_id") if k in self.__dict__]
        return f"{type(self).__name__}({', '.join(shown)})"


class PKMixin:
    id: Mapped[IntPK]


class TimestampMixin:
    """`created_at` set on insert; `updated_at` refreshed by every UPDATE (server clock, UTC)."""

    created_at: Mapped[CreatedAt]
    updated_at: Mapped[UpdatedAt]


__all__ = ["Base", "PKMixin", "PKType", "TimestampMixin", "NAMING_CONVENTION"]
