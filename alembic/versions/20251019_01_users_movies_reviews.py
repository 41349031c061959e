"""
Initial schema: users, movies, reviews.

- users: credentials, profile, latest refresh token; unique email and
  case-insensitive unique username.
- movies: seeded catalogue.
- reviews: rating 1..10 + text, cascading from movies and users.
"""

from alembic import op
import sqlalchemy as sa

# Revision identifiers, used by Alembic.
revision = "20251019_01_users_movies_reviews"
down_revision = None
branch_labels = None
depends_on = None

PK = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", PK, primary_key=True, autoincrement=True, nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("refresh_token", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.CheckConstraint("length(trim(email)) > 0", name="ck_users_email_not_blank"),
        sa.CheckConstraint("length(trim(username)) > 0", name="ck_users_username_not_blank"),
    )
    op.create_index("uq_users_username_lower", "users", [sa.text("lower(username)")], unique=True)

    # --- movies ---
    op.create_table(
        "movies",
        sa.Column("id", PK, primary_key=True, autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("genre", sa.String(length=64), nullable=True),
        sa.Column("release_year", sa.Integer(), nullable=True),
        sa.Column("director", sa.String(length=255), nullable=True),
        sa.Column("poster_url", sa.String(length=2048), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_movies"),
    )
    op.create_index("ix_movies_title", "movies", ["title"], unique=False)
    op.create_index("ix_movies_release_year", "movies", ["release_year"], unique=False)

    # --- reviews ---
    op.create_table(
        "reviews",
        sa.Column("id", PK, primary_key=True, autoincrement=True, nullable=False),
        sa.Column("movie_id", PK, nullable=False),
        sa.Column("user_id", PK, nullable=False),
        sa.Column("review_text", sa.Text(), nullable=False),
        sa.Column("rating", sa.SmallInteger(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_reviews"),
        sa.ForeignKeyConstraint(["movie_id"], ["movies.id"], name="fk_reviews_movie_id_movies", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], name="fk_reviews_user_id_users", ondelete="CASCADE"),
        sa.CheckConstraint("rating BETWEEN 1 AND 10", name="ck_reviews_rating_range"),
    )
    op.create_index("ix_reviews_movie_id", "reviews", ["movie_id"], unique=False)
    op.create_index("ix_reviews_user_id", "reviews", ["user_id"], unique=False)
    op.create_index("ix_reviews_movie_created", "reviews", ["movie_id", "created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_reviews_movie_created", table_name="reviews")
    op.drop_index("ix_reviews_user_id", table_name="reviews")
    op.drop_index("ix_reviews_movie_id", table_name="reviews")
    op.drop_table("reviews")

    op.drop_index("ix_movies_release_year", table_name="movies")
    op.drop_index("ix_movies_title", table_name="movies")
    op.drop_table("movies")

    op.drop_index("uq_users_username_lower", table_name="users")
    op.drop_table("users")
