"""
vps-back — Source SQLAlchemy Model
===================================

What:  ORM model for the `sources` table: one referrer name and how many
       times it was reported.
How:   `name` is unique; the source service increments `count` with an
       INSERT ... ON CONFLICT (name) DO UPDATE statement.
"""

from datetime import datetime, timezone

from sqlalchemy import Index, Integer, String, TIMESTAMP, text
from sqlalchemy.orm import Mapped, mapped_column

from vps_back.database import Base


class Source(Base):
    """Referrer counter keyed by name."""

    __tablename__ = "sources"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_sources_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Source(name='{self.name}', count={self.count})>"
