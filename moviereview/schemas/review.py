from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, constr

from moviereview.schemas.base import CamelModel
from moviereview.schemas.user import UserPublic

ReviewText = constr(strip_whitespace=True, min_length=1, max_length=5000)


class ReviewCreate(CamelModel):
    id: int = Field(..., description="Target movie id")
    review_text: ReviewText
    rating: int = Field(..., ge=1, le=10)


class ReviewUpdate(CamelModel):
    review_id: int
    review_text: ReviewText
    rating: int = Field(..., ge=1, le=10)


class ReviewDelete(CamelModel):
    review_id: int


class ReviewOut(CamelModel):
    id: int
    movie_id: int
    user_id: int
    review_text: str
    rating: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ReviewWithAuthor(ReviewOut):
    user: Optional[UserPublic] = None


class ReviewResponse(CamelModel):
    review: ReviewOut
