"""
vps-back — Homebrew Download SQLAlchemy Model
==============================================

What:  ORM model representing the `brew_downloads` table.
Who:   Written by the brew service on every tracked bottle download;
       read in full by the stats endpoint.

Table Design Rationale:
    - One row per (project, version, platform) triple, enforced by the
      unique index `idx_brew_downloads_unique`. The counter upsert targets
      that index in its ON CONFLICT clause.
    - count: 1 on first observation, +1 on each later download
    - Rows are never deleted.
"""

from datetime import datetime, timezone

from sqlalchemy import Index, Integer, String, TIMESTAMP, text
from sqlalchemy.orm import Mapped, mapped_column

from vps_back.database import Base


class DownloadRecord(Base):
    """Download counter for one bottle of one project version on one platform."""

    __tablename__ = "brew_downloads"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Allow-listed formula name, e.g. "rona"
    project: Mapped[str] = mapped_column(String(255), nullable=False)

    # Parsed from the bottle filename, dots preserved ("2.17.7")
    version: Mapped[str] = mapped_column(String(255), nullable=False)

    # Final dot-segment before ".bottle.tar.gz" ("arm64_sequoia")
    platform: Mapped[str] = mapped_column(String(255), nullable=False)

    count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
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
        Index("idx_brew_downloads_unique", "project", "version", "platform", unique=True),
        Index("idx_brew_downloads_project", "project"),
    )

    def __repr__(self) -> str:
        return (
            f"<DownloadRecord(project='{self.project}', version='{self.version}', "
            f"platform='{self.platform}', count={self.count})>"
        )
