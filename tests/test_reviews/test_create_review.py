# tests/test_reviews/test_create_review.py

import pytest
from fastapi import status
from httpx import AsyncClient
from sqlalchemy import func, select

from moviereview.db.models.review import Review

CREATE_URL = "/api/v1/createreview"


@pytest.mark.anyio
async def test_create_review(async_client: AsyncClient, db_session, movie, user_with_token, auth_headers):
    user, _ = user_with_token
    resp = await async_client.post(
        CREATE_URL,
        json={"id": movie.id, "reviewText": "  A masterpiece.  ", "rating": 10},
        headers=auth_headers,
    )

    assert resp.status_code == status.HTTP_201_CREATED, resp.text
    review = resp.json()["review"]
    assert review["movieId"] == movie.id
    assert review["userId"] == user.id
    assert review["reviewText"] == "A masterpiece."
    assert review["rating"] == 10

    row = await db_session.get(Review, review["id"])
    assert row is not None and row.user_id == user.id


@pytest.mark.anyio
async def test_same_user_may_review_twice(async_client: AsyncClient, db_session, movie, auth_headers):
    for rating in (6, 8):
        resp = await async_client.post(
            CREATE_URL, json={"id": movie.id, "reviewText": "Again", "rating": rating}, headers=auth_headers
        )
        assert resp.status_code == status.HTTP_201_CREATED

    count = (await db_session.execute(select(func.count(Review.id)).where(Review.movie_id == movie.id))).scalar_one()
    assert count == 2


@pytest.mark.anyio
async def test_review_for_missing_movie_fails(async_client: AsyncClient, auth_headers):
    resp = await async_client.post(
        CREATE_URL, json={"id": 999999, "reviewText": "Ghost film", "rating": 5}, headers=auth_headers
    )
    assert resp.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert resp.json()["detail"] == "Internal server error"


@pytest.mark.anyio
@pytest.mark.parametrize("rating", [0, 11])
async def test_rating_out_of_range(async_client: AsyncClient, movie, auth_headers, rating):
    resp = await async_client.post(
        CREATE_URL, json={"id": movie.id, "reviewText": "Hmm", "rating": rating}, headers=auth_headers
    )
    assert resp.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.anyio
async def test_create_review_requires_token(async_client: AsyncClient, movie):
    resp = await async_client.post(CREATE_URL, json={"id": movie.id, "reviewText": "Anon", "rating": 5})
    assert resp.status_code == status.HTTP_401_UNAUTHORIZED
