# tests/test_scripts/test_seed_movies.py

import importlib.util
import json
from pathlib import Path

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from moviereview.db.models.movie import Movie

_SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "seed_movies.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("seed_movies", _SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


seed_movies = _load_script()


# ──────────────────────────────────────────────────────────────────────────────
# 🧮 Title de-duplication
# ──────────────────────────────────────────────────────────────────────────────
def test_repeated_titles_in_input_are_inserted_once():
    movies = [{"title": "Solaris"}, {"title": "Heat", "genre": "Crime"}, {"title": "Solaris", "genre": "Drama"}]
    new = seed_movies.select_new_movies(movies, existing_titles=[])
    assert [m["title"] for m in new] == ["Solaris", "Heat"]
    assert "genre" not in new[0]


def test_titles_already_in_catalogue_are_skipped():
    new = seed_movies.select_new_movies([{"title": "Heat"}, {"title": "Ran"}], existing_titles={"Heat"})
    assert [m["title"] for m in new] == ["Ran"]


def test_load_movies_keeps_known_fields(tmp_path):
    path = tmp_path / "movies.json"
    path.write_text(json.dumps([{"title": "Ran", "release_year": 1985, "rating": 9}]), encoding="utf-8")
    assert seed_movies.load_movies(str(path)) == [{"title": "Ran", "release_year": 1985}]


def test_load_movies_rejects_untitled_entries(tmp_path):
    path = tmp_path / "movies.json"
    path.write_text(json.dumps([{"title": "  "}]), encoding="utf-8")
    with pytest.raises(SystemExit):
        seed_movies.load_movies(str(path))


# ──────────────────────────────────────────────────────────────────────────────
# 🌱 Seeding against the database
# ──────────────────────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_seed_skips_existing_and_repeated_titles(db_session: AsyncSession, movie: Movie):
    movies = [{"title": movie.title}, {"title": "Solaris"}, {"title": "Solaris"}]

    added = await seed_movies.seed(movies)

    assert added == 1
    count = (
        await db_session.execute(select(func.count()).select_from(Movie).where(Movie.title == "Solaris"))
    ).scalar_one()
    assert count == 1
    total = (await db_session.execute(select(func.count()).select_from(Movie))).scalar_one()
    assert total == 2


@pytest.mark.anyio
async def test_seed_dry_run_writes_nothing(db_session: AsyncSession):
    added = await seed_movies.seed([{"title": "Ran"}, {"title": "Ran"}], dry_run=True)

    assert added == 1
    total = (await db_session.execute(select(func.count()).select_from(Movie))).scalar_one()
    assert total == 0
