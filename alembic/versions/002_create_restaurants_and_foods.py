"""002: create restaurants and foods

Revision ID: 002
Revises: 001
Create Date: 2026-10-17
"""
from typing import Sequence, Union

from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE restaurants (
            id          SERIAL PRIMARY KEY,
            name        VARCHAR(255) NOT NULL,
            description TEXT,
            location    VARCHAR(255),
            hours       VARCHAR(255),
            image_url   TEXT,
            created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("""
        CREATE TABLE foods (
            id              SERIAL PRIMARY KEY,
            restaurant_id   INT NOT NULL REFERENCES restaurants(id) ON DELETE CASCADE,
            name            VARCHAR(255) NOT NULL,
            description     TEXT,
            price           NUMERIC(10, 2),
            food_type       VARCHAR(50),
            image_url       TEXT,
            created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("CREATE INDEX idx_foods_restaurant ON foods (restaurant_id);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS foods;")
    op.execute("DROP TABLE IF EXISTS restaurants;")
