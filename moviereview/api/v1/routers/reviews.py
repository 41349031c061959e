"""
Movies & Reviews API
====================

GET  /movies                 — all movies (public)
POST /getmoviewithreviews    — `{id}` → movie with reviews and authors (auth)
POST /createreview           — `{id, reviewText, rating}` → 201 review (auth)
POST /updatereview           — `{reviewId, reviewText, rating}` → review (auth)
POST /deletereview           — `{reviewId}` → 204 (auth)

Reviews are addressed by id only; see `REVIEW_OWNERSHIP_ENFORCED` for whether
the caller must be the author.
"""

from typing import List

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from moviereview.core.dependencies import get_current_identity
from moviereview.db.session import get_async_db
from moviereview.schemas.auth import TokenPayload
from moviereview.schemas.movie import MovieDetailResponse, MovieLookup, MovieOut, MovieWithReviews
from moviereview.schemas.review import (
    ReviewCreate,
    ReviewDelete,
    ReviewOut,
    ReviewResponse,
    ReviewUpdate,
)
from moviereview.services import review_service

router = APIRouter(tags=["Reviews"])


# ─────────────────────────────────────────────────────────────
# 🎬 Movies
# ─────────────────────────────────────────────────────────────
@router.get("/movies", response_model=List[MovieOut], summary="List all movies")
async def list_movies(db: AsyncSession = Depends(get_async_db)) -> List[MovieOut]:
    movies = await review_service.list_movies(db)
    return [MovieOut.model_validate(m) for m in movies]


@router.post("/getmoviewithreviews", response_model=MovieDetailResponse, summary="Movie with its reviews")
async def get_movie_with_reviews(
    payload: MovieLookup = Body(...),
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_db),
) -> MovieDetailResponse:
    movie = await review_service.get_movie_with_reviews(db, payload.id)
    return MovieDetailResponse(movie=MovieWithReviews.model_validate(movie))


# ─────────────────────────────────────────────────────────────
# ⭐ Reviews
# ─────────────────────────────────────────────────────────────
@router.post(
    "/createreview",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Review a movie",
)
async def create_review(
    payload: ReviewCreate = Body(...),
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_db),
) -> ReviewResponse:
    review = await review_service.create_review(
        db,
        movie_id=payload.id,
        identity=identity,
        review_text=payload.review_text,
        rating=payload.rating,
    )
    return ReviewResponse(review=ReviewOut.model_validate(review))


@router.post("/updatereview", response_model=ReviewResponse, summary="Edit a review")
async def update_review(
    payload: ReviewUpdate = Body(...),
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_db),
) -> ReviewResponse:
    review = await review_service.update_review(
        db,
        review_id=payload.review_id,
        review_text=payload.review_text,
        rating=payload.rating,
        identity=identity,
    )
    return ReviewResponse(review=ReviewOut.model_validate(review))


@router.post(
    "/deletereview",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a review",
)
async def delete_review(
    payload: ReviewDelete = Body(...),
    identity: TokenPayload = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_db),
) -> Response:
    await review_service.delete_review(db, review_id=payload.review_id, identity=identity)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = [
    "router",
    "list_movies",
    "get_movie_with_reviews",
    "create_review",
    "update_review",
    "delete_review",
]
