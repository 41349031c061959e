from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from moviereview.schemas.base import CamelModel
from moviereview.schemas.review import ReviewWithAuthor


class MovieOut(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    genre: Optional[str] = None
    release_year: Optional[int] = None
    director: Optional[str] = None
    poster_url: Optional[str] = None
    created_at: Optional[datetime] = None


class MovieWithReviews(MovieOut):
    reviews: List[ReviewWithAuthor] = []


class MovieLookup(CamelModel):
    id: int = Field(..., description="Movie id")


class MovieDetailResponse(CamelModel):
    movie: MovieWithReviews
