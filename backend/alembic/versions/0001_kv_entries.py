"""Key-value table backing the review store

Revision ID: 0001
Revises: —
Create Date: 2026-10-17 00:00:00
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # One row per movie: key "movie-reviews-<id>", value is the JSON array blob
    op.create_table(
        "kv_entries",
        sa.Column("key", sa.String(length=255), primary_key=True),
        sa.Column("value", sa.LargeBinary(), nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )


def downgrade() -> None:
    op.drop_table("kv_entries")
