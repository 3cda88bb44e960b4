"""create user preferences

Revision ID: 8c4e2d6a1f30
Revises: 3f1a9c0d2b7e
Create Date: 2026-10-19
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "8c4e2d6a1f30"
down_revision: Union[str, Sequence[str], None] = "3f1a9c0d2b7e"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "user_preferences",
        sa.Column("user_id", sa.String(255), primary_key=True),
        sa.Column("currency", sa.String(3), nullable=False, server_default="USD"),
        sa.Column("country", sa.String(2), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.current_timestamp()),
    )


def downgrade() -> None:
    op.drop_table("user_preferences")
