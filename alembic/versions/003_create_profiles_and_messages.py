"""003: create profiles and messages

Revision ID: 003
Revises: 002
Create Date: 2026-10-17
"""
from typing import Sequence, Union

from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # name_change: renames still allowed (1 → 0 after the single rename)
    op.execute("""
        CREATE TABLE profiles (
            id          SERIAL PRIMARY KEY,
            name        VARCHAR(100) NOT NULL,
            auth_id     UUID NOT NULL,
            name_change INT NOT NULL DEFAULT 1,
            created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT profiles_auth_id_key UNIQUE (auth_id),
            CONSTRAINT profiles_auth_id_fkey FOREIGN KEY (auth_id) REFERENCES auth.users(id)
        );
    """)
    op.execute("""
        CREATE TABLE messages (
            id          SERIAL PRIMARY KEY,
            profile_id  INT REFERENCES profiles(id) ON DELETE SET NULL,
            subject     VARCHAR(255) NOT NULL,
            message     TEXT NOT NULL,
            created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW()
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS messages;")
    op.execute("DROP TABLE IF EXISTS profiles;")
