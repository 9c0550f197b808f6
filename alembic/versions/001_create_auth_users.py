"""001: create auth schema stand-in

Revision ID: 001
Revises:
Create Date: 2026-10-17

In production auth.users is owned by the identity provider and already
exists; IF NOT EXISTS keeps this a no-op there. Local and test databases get
the minimal columns the API reads (id, email).
"""
from typing import Sequence, Union

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("CREATE SCHEMA IF NOT EXISTS auth;")
    op.execute("""
        CREATE TABLE IF NOT EXISTS auth.users (
            id          UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            email       VARCHAR(255) UNIQUE,
            created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW()
        );
    """)


def downgrade() -> None:
    # Never drop the provider's schema; only the local stand-in table
    op.execute("DROP TABLE IF EXISTS auth.users;")
