#!/usr/bin/env python3
"""
MovieReview • Seed Movies
=========================

Inserts a starter movie catalogue through the application's session factory.
Titles already present (or repeated in the input) are skipped, so the script is safe to re-run.

Usage
-----
    python scripts/seed_movies.py
    python scripts/seed_movies.py --file movies.json --dry-run

`--file` takes a JSON list of objects with `title` plus any of
`description`, `genre`, `release_year`, `director`, `poster_url`.
"""

import argparse
import asyncio
import json
import os
import sys
from typing import Any, Dict, List

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from loguru import logger
from sqlalchemy import select

from moviereview.db.models.movie import Movie
from moviereview.db.session import async_engine, transactional_async_session

DEFAULT_MOVIES: List[Dict[str, Any]] = [
    {"title": "The Shawshank Redemption", "genre": "Drama", "release_year": 1994, "director": "Frank Darabont"},
    {"title": "The Godfather", "genre": "Crime", "release_year": 1972, "director": "Francis Ford Coppola"},
    {"title": "The Dark Knight", "genre": "Action", "release_year": 2008, "director": "Christopher Nolan"},
    {"title": "Pulp Fiction", "genre": "Crime", "release_year": 1994, "director": "Quentin Tarantino"},
    {"title": "Spirited Away", "genre": "Animation", "release_year": 2001, "director": "Hayao Miyazaki"},
    {"title": "Inception", "genre": "Sci-Fi", "release_year": 2010, "director": "Christopher Nolan"},
    {"title": "Parasite", "genre": "Thriller", "release_year": 2019, "director": "Bong Joon-ho"},
    {"title": "Amélie", "genre": "Comedy", "release_year": 2001, "director": "Jean-Pierre Jeunet"},
]

_FIELDS = ("title", "description", "genre", "release_year", "director", "poster_url")


def load_movies(path: str) -> List[Dict[str, Any]]:
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, list):
        raise SystemExit(f"{path}: expected a JSON list of movies")
    rows = []
    for item in data:
        if not isinstance(item, dict) or not str(item.get("title", "")).strip():
            raise SystemExit(f"{path}: every movie needs a non-empty title")
        rows.append({k: item[k] for k in _FIELDS if k in item})
    return rows


def select_new_movies(movies: List[Dict[str, Any]], existing_titles) -> List[Dict[str, Any]]:
    """Movies to insert: titles not in the catalogue, first occurrence only."""
    seen = set(existing_titles)
    new = []
    for m in movies:
        if m["title"] in seen:
            continue
        seen.add(m["title"])
        new.append(m)
    return new


async def seed(movies: List[Dict[str, Any]], *, dry_run: bool = False) -> int:
    """Insert movies whose title is not yet present; returns how many were new."""
    async with transactional_async_session() as db:
        existing = (await db.execute(select(Movie.title))).scalars().all()
        new = select_new_movies(movies, existing)
        for m in new:
            logger.info("{} {}", "Would add" if dry_run else "Adding", m["title"])
            if not dry_run:
                db.add(Movie(**m))
    await async_engine.dispose()
    return len(new)


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed the movie catalogue")
    ap.add_argument("--file", help="JSON file with movies; default: built-in starter list")
    ap.add_argument("--dry-run", action="store_true", help="Report what would be inserted without writing")
    args = ap.parse_args()

    movies = load_movies(args.file) if args.file else DEFAULT_MOVIES
    added = asyncio.run(seed(movies, dry_run=args.dry_run))
    print(f"{added} movie(s) {'to add' if args.dry_run else 'added'}; {len(movies) - added} skipped.")


if __name__ == "__main__":
    main()
