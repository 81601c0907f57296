"""Create stickers table

Revision ID: 002
Revises: 001
Create Date: 2025-10-01 00:00:00.000000+00:00

What:  Location stickers with a JSON list of picture URLs (JSONB on PostgreSQL).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "stickers",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("place_name", sa.String(255), nullable=False),
        sa.Column(
            "pictures",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=False,
            server_default=sa.text("'[]'"),
        ),
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
    )
    op.create_index("idx_stickers_name", "stickers", ["name"])
    op.create_index("idx_stickers_created_at", "stickers", [sa.text("created_at DESC")])


def downgrade() -> None:
    op.drop_index("idx_stickers_created_at", table_name="stickers")
    op.drop_index("idx_stickers_name", table_name="stickers")
    op.drop_table("stickers")
