# tests/utils/factory.py

from typing import Optional
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from moviereview.core.security import get_password_hash
from moviereview.db.models.movie import Movie
from moviereview.db.models.user import User

DEFAULT_PASSWORD = "Secret#123"


def make_email(prefix: str = "user") -> str:
    return f"{prefix}_{uuid4().hex[:8]}@example.com"


def make_username(prefix: str = "user") -> str:
    return f"{prefix}_{uuid4().hex[:8]}"


async def create_user(
    session: AsyncSession,
    *,
    email: Optional[str] = None,
    username: Optional[str] = None,
    password: str = DEFAULT_PASSWORD,
    full_name: str = "Test User",
) -> User:
    """
    ✅ Insert a user the way registration would store it
    (lower-cased username, bcrypt hash). Flushed, not committed.
    """
    user = User(
        full_name=full_name,
        email=email or make_email(),
        username=(username or make_username()).lower(),
        hashed_password=get_password_hash(password),
    )
    session.add(user)
    await session.flush()
    return user


async def create_movie(
    session: AsyncSession,
    *,
    title: Optional[str] = None,
    genre: Optional[str] = "Drama",
    release_year: Optional[int] = 1999,
    director: Optional[str] = "Jane Doe",
    description: Optional[str] = None,
) -> Movie:
    """✅ Insert a catalogue movie. Flushed, not committed."""
    movie = Movie(
        title=title or f"Movie {uuid4().hex[:6]}",
        genre=genre,
        release_year=release_year,
        director=director,
        description=description,
    )
    session.add(movie)
    await session.flush()
    return movie
