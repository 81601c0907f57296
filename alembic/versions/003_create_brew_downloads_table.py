"""Create brew_downloads table

Revision ID: 003
Revises: 002
Create Date: 2026-02-18 00:00:00.000000+00:00

What:  Homebrew bottle download counters.
How:   The unique index on (project, version, platform) is what the tracker's
       INSERT ... ON CONFLICT targets; dropping it breaks counting.
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "brew_downloads",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("project", sa.String(255), nullable=False),
        sa.Column("version", sa.String(255), nullable=False),
        sa.Column("platform", sa.String(255), nullable=False),
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
    )
    op.create_index(
        "idx_brew_downloads_unique",
        "brew_downloads",
        ["project", "version", "platform"],
        unique=True,
    )
    op.create_index("idx_brew_downloads_project", "brew_downloads", ["project"])


def downgrade() -> None:
    op.drop_index("idx_brew_downloads_project", table_name="brew_downloads")
    op.drop_index("idx_brew_downloads_unique", table_name="brew_downloads")
    op.drop_table("brew_downloads")
