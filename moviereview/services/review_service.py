"""
Review service — movies & reviews
=================================

Reads over the (pre-seeded) movie catalogue and CRUD on reviews.

Behavior notes
--------------
- `create_review` does not check that the movie exists or that the user has not
  reviewed it already; a foreign-key failure surfaces as a 500.
- `update_review` / `delete_review` address reviews by id only. Whether the
  caller must be the author is decided by `settings.REVIEW_OWNERSHIP_ENFORCED`
  (off by default: any authenticated user may edit or delete any review).
- Persistence failures (and missing reviews on update/delete) are reported as
  `InternalError`, matching the public API contract.
"""

from typing import List, Sequence

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from moviereview.core.config import settings
from moviereview.core.exceptions import ForbiddenError, InternalError, NotFoundError
from moviereview.db.models.movie import Movie
from moviereview.db.models.review import Review
from moviereview.schemas.auth import TokenPayload


def _check_ownership(review: Review, identity: TokenPayload) -> None:
    if settings.REVIEW_OWNERSHIP_ENFORCED and review.user_id != identity.user_id:
        logger.info("Review {} change refused for non-author {}", review.id, identity.user_id)
        raise ForbiddenError("You can only modify your own reviews")


# ─────────────────────────────────────────────────────────────
# 🎬 Movies
# ─────────────────────────────────────────────────────────────
async def list_movies(db: AsyncSession) -> Sequence[Movie]:
    try:
        result = await db.execute(select(Movie).order_by(Movie.id))
    except SQLAlchemyError:
        logger.exception("Listing movies failed")
        raise InternalError("Internal server error")
    return result.scalars().all()


async def get_movie_with_reviews(db: AsyncSession, movie_id: int) -> Movie:
    """One movie with its reviews and each review's author."""
    stmt = (
        select(Movie)
        .where(Movie.id == movie_id)
        .options(selectinload(Movie.reviews).selectinload(Review.user))
        # Never serve a stale collection from the identity map.
        .execution_options(populate_existing=True)
    )
    try:
        movie = (await db.execute(stmt)).scalar_one_or_none()
    except SQLAlchemyError:
        logger.exception("Fetching movie {} failed", movie_id)
        raise InternalError("Internal server error")
    if movie is None:
        raise NotFoundError("Movie not found", details={"id": movie_id})
    return movie


# ─────────────────────────────────────────────────────────────
# ⭐ Reviews
# ─────────────────────────────────────────────────────────────
async def create_review(
    db: AsyncSession,
    movie_id: int,
    identity: TokenPayload,
    review_text: str,
    rating: int,
) -> Review:
    review = Review(movie_id=movie_id, user_id=identity.user_id, review_text=review_text, rating=rating)
    try:
        db.add(review)
        await db.commit()
        await db.refresh(review)
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Error creating review for movie {}", movie_id)
        raise InternalError("Internal server error")
    logger.info("Review {} created | movie_id={} user_id={}", review.id, movie_id, identity.user_id)
    return review


async def update_review(
    db: AsyncSession,
    review_id: int,
    review_text: str,
    rating: int,
    identity: TokenPayload,
) -> Review:
    try:
        review = await db.get(Review, review_id)
    except SQLAlchemyError:
        logger.exception("Review lookup failed")
        raise InternalError("Failed to update review")
    if review is None:
        logger.info("Update of missing review {}", review_id)
        raise InternalError("Failed to update review", details={"reviewId": review_id})

    _check_ownership(review, identity)

    try:
        review.review_text = review_text
        review.rating = rating
        await db.commit()
        await db.refresh(review)
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to update review {}", review_id)
        raise InternalError("Failed to update review")
    return review


async def delete_review(db: AsyncSession, review_id: int, identity: TokenPayload) -> None:
    try:
        review = await db.get(Review, review_id)
    except SQLAlchemyError:
        logger.exception("Review lookup failed")
        raise InternalError("Failed to delete review")
    if review is None:
        logger.info("Delete of missing review {}", review_id)
        raise InternalError("Failed to delete review", details={"reviewId": review_id})

    _check_ownership(review, identity)

    try:
        await db.delete(review)
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to delete review {}", review_id)
        raise InternalError("Failed to delete review")
    logger.info("Review {} deleted by user {}", review_id, identity.user_id)


__all__: List[str] = [
    "list_movies",
    "get_movie_with_reviews",
    "create_review",
    "update_review",
    "delete_review",
]
