"""Create sources table

Revision ID: 001
Revises: None
Create Date: 2025-06-14 16:30:05.000000+00:00

What:  Referrer counters, one row per unique source name.
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "sources",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        # Target of ON CONFLICT (name) in the counter upsert
        sa.UniqueConstraint("name"),
    )
    op.create_index("idx_sources_created_at", "sources", ["created_at"])


def downgrade() -> None:
    op.drop_index("idx_sources_created_at", table_name="sources")
    op.drop_table("sources")
