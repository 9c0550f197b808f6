"""004: create food, general and legacy restaurant reviews

Revision ID: 004
Revises: 003
Create Date: 2026-10-17
"""
from typing import Sequence, Union

from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE food_reviews (
            id          SERIAL PRIMARY KEY,
            user_id     UUID NOT NULL,
            food_id     INT NOT NULL REFERENCES foods(id) ON DELETE CASCADE,
            rating      INT NOT NULL CHECK (rating BETWEEN 1 AND 5),
            text        TEXT,
            anonymous   BOOLEAN NOT NULL DEFAULT FALSE,
            created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("CREATE INDEX idx_food_reviews_food ON food_reviews (food_id);")
    op.execute("CREATE INDEX idx_food_reviews_user ON food_reviews (user_id, created_at DESC);")

    op.execute("""
        CREATE TABLE general_reviews (
            id              SERIAL PRIMARY KEY,
            user_id         UUID NOT NULL,
            restaurant_id   INT NOT NULL REFERENCES restaurants(id) ON DELETE CASCADE,
            rating          INT NOT NULL CHECK (rating BETWEEN 1 AND 5),
            text            TEXT,
            anonymous       BOOLEAN NOT NULL DEFAULT FALSE,
            created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
        );
    """)
    op.execute(
        "CREATE INDEX idx_general_reviews_restaurant ON general_reviews (restaurant_id);"
    )
    op.execute(
        "CREATE INDEX idx_general_reviews_user ON general_reviews (user_id, created_at DESC);"
    )

    # Read-only legacy table, served as-is by GET /restaurant-reviews
    op.execute("""
        CREATE TABLE restaurant_reviews (
            id              SERIAL PRIMARY KEY,
            restaurant_id   INT NOT NULL REFERENCES restaurants(id) ON DELETE CASCADE,
            user_id         UUID,
            rating          INT,
            text            TEXT,
            created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS restaurant_reviews;")
    op.execute("DROP TABLE IF EXISTS general_reviews;")
    op.execute("DROP TABLE IF EXISTS food_reviews;")
