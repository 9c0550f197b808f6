"""005: create review likes and general review reports

Revision ID: 005
Revises: 004
Create Date: 2026-10-17
"""
from typing import Sequence, Union

from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # One like per (review, user); toggling deletes/inserts the row
    op.execute("""
        CREATE TABLE likes (
            id              SERIAL PRIMARY KEY,
            food_review_id  INT NOT NULL REFERENCES food_reviews(id),
            user_id         UUID NOT NULL,
            created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            UNIQUE (food_review_id, user_id)
        );
    """)
    op.execute("""
        CREATE TABLE general_review_likes (
            id                  SERIAL PRIMARY KEY,
            general_review_id   INT NOT NULL REFERENCES general_reviews(id),
            user_id             UUID NOT NULL,
            created_at          TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            UNIQUE (general_review_id, user_id)
        );
    """)
    op.execute("""
        CREATE TABLE general_review_reports (
            id                  SERIAL PRIMARY KEY,
            general_review_id   INT NOT NULL REFERENCES general_reviews(id),
            user_id             UUID NOT NULL,
            reason              TEXT,
            created_at          TIMESTAMPTZ NOT NULL DEFAULT NOW()
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS general_review_reports;")
    op.execute("DROP TABLE IF EXISTS general_review_likes;")
    op.execute("DROP TABLE IF EXISTS likes;")
