"""
vps-back — Sticker SQLAlchemy Model
====================================

What:  ORM model for the `stickers` table: a named sticker placed at a
       geographic location, with optional picture URLs.

Table Design Rationale:
    - latitude/longitude: plain floats; range is enforced by the request schema
    - pictures: JSON array of URL strings (JSONB on PostgreSQL)
    - Index on created_at: the list endpoint returns newest first
"""

from datetime import datetime, timezone
from typing import List

from sqlalchemy import Float, Index, Integer, JSON, String, TIMESTAMP, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from vps_back.database import Base


class Sticker(Base):
    """A sticker someone placed somewhere."""

    __tablename__ = "stickers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    place_name: Mapped[str] = mapped_column(String(255), nullable=False)
    pictures: Mapped[List[str]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=list,
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
        Index("idx_stickers_name", "name"),
        Index("idx_stickers_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Sticker(id={self.id}, name='{self.name}', place_name='{self.place_name}')>"
