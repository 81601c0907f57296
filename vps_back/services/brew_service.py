"""
vps-back — Homebrew Download Tracking Service
==============================================

What:  Records Homebrew bottle downloads and computes download statistics.
How:   Homebrew is configured with this server as the bottle `root_url`, so
       `brew install <formula>` fetches `{root_url}/{filename}`. The route
       hands (project, filename) to this service, which:

           lookup_project ──▶ parse_bottle_filename ──▶ record_download
                                                              │
                                      build_redirect_url ◀────┘

       and the route answers 302 to the real release asset.

Ordering Constraint:
    The project lookup runs before anything touches the database, so an
    unknown project can never create a download record.

Concurrency:
    record_download is one INSERT ... ON CONFLICT DO UPDATE ... RETURNING
    statement. The database applies the increment atomically per
    (project, version, platform) row, so concurrent downloads of the same
    bottle never lose counts and no in-process lock is needed.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vps_back.config import settings
from vps_back.database import dialect_insert
from vps_back.exceptions import (
    DatabaseError,
    HeaderEncodingError,
    NotFoundError,
    ValidationError,
)
from vps_back.models.brew_download import DownloadRecord

logger = logging.getLogger(__name__)

BOTTLE_SUFFIX = ".bottle.tar.gz"

# Formula name → (GitHub organization, repository) hosting its release assets
BREW_PROJECTS: Dict[str, Tuple[str, str]] = {
    "rona": ("rona-rs", "rona"),
    "clean-dev-dirs": ("clean-dev-dirs", "clean-dev-dirs"),
}


# ══════════════════════════════════════════════════════════════════════════
# Pure helpers
# ══════════════════════════════════════════════════════════════════════════


def lookup_project(project: str) -> Tuple[str, str]:
    """
    Return the (organization, repository) pair for a known project.

    Raises:
        NotFoundError: project is not in BREW_PROJECTS (→ 404)
    """
    try:
        return BREW_PROJECTS[project]
    except KeyError:
        raise NotFoundError(
            message=f"Unknown project: {project}",
            context={"project": project},
        ) from None


def parse_bottle_filename(project: str, filename: str) -> Optional[Tuple[str, str]]:
    """
    Split a bottle filename into (version, platform).

    Expected format: `{project}-{version}.{platform}.bottle.tar.gz`

    The platform is the segment after the LAST dot, so dotted versions are
    kept whole:

        >>> parse_bottle_filename("rona", "rona-2.17.7.arm64_sequoia.bottle.tar.gz")
        ('2.17.7', 'arm64_sequoia')

    The project must match the literal `{project}-` prefix; `rona` does not
    match `rona-extra-1.0.x.bottle.tar.gz` unless the version really is
    `extra-1.0`.

    Returns:
        (version, platform), or None when the filename does not have the
        expected shape.
    """
    if not filename.endswith(BOTTLE_SUFFIX):
        return None
    base = filename[: -len(BOTTLE_SUFFIX)]

    name_version, dot, platform = base.rpartition(".")
    if not dot:
        return None

    prefix = f"{project}-"
    if not name_version.startswith(prefix):
        return None

    return name_version[len(prefix):], platform


def build_redirect_url(
    organization: str,
    repository: str,
    version: str,
    filename: str,
    host: Optional[str] = None,
) -> str:
    """
    Build the release asset URL the tracker redirects to.

    Shape: https://{host}/{organization}/{repository}/releases/download/v{version}/{filename}

    Raises:
        HeaderEncodingError: the URL contains control characters and cannot
                             be sent as a Location header (→ 500)
    """
    host = host or settings.brew_release_host
    url = f"https://{host}/{organization}/{repository}/releases/download/v{version}/{filename}"

    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):
        raise HeaderEncodingError(context={"url": repr(url)})
    return url


def aggregate_download_stats(records: Iterable[Any]) -> Dict[str, Dict[str, Any]]:
    """
    Fold download records into per-project totals and per-version counts.

    Output shape (platforms of the same version are summed):

        {
            "rona": {
                "total_downloads": 8,
                "total_installs": 8,
                "2.17.7": {"downloads": 3, "installs": 3},
                "2.18.0": {"downloads": 5, "installs": 5},
            }
        }

    Installs mirror downloads: every tracked fetch is one `brew install`.
    """
    totals: Dict[str, int] = {}
    versions: Dict[str, Dict[str, int]] = {}

    for record in records:
        totals[record.project] = totals.get(record.project, 0) + record.count
        per_version = versions.setdefault(record.project, {})
        per_version[record.version] = per_version.get(record.version, 0) + record.count

    stats: Dict[str, Dict[str, Any]] = {}
    for project, total in totals.items():
        entry: Dict[str, Any] = {
            "total_downloads": total,
            "total_installs": total,
        }
        for version, count in versions[project].items():
            entry[version] = {"downloads": count, "installs": count}
        stats[project] = entry
    return stats


# ══════════════════════════════════════════════════════════════════════════
# Service
# ══════════════════════════════════════════════════════════════════════════


class BrewService:
    """
    Business logic for the /brew endpoints.

    Responsibilities:
        - track_download(): validate, count, and resolve the redirect target
        - record_download(): atomic per-triple counter upsert
        - get_stats(): aggregate every download record
    """

    async def record_download(
        self,
        db: AsyncSession,
        project: str,
        version: str,
        platform: str,
    ) -> int:
        """
        Count one download of (project, version, platform) and return the new total.

        A never-seen triple is inserted with count = 1; an existing one gets
        count + 1 and a fresh updated_at. The transaction is committed
        before returning so the redirect is only issued for a durable count.

        Raises:
            DatabaseError: the statement or the commit failed (→ 500, not retried)
        """
        now = datetime.now(timezone.utc)
        stmt = (
            dialect_insert(db, DownloadRecord)
            .values(
                project=project,
                version=version,
                platform=platform,
                count=1,
                created_at=now,
                updated_at=now,
            )
            .on_conflict_do_update(
                index_elements=["project", "version", "platform"],
                set_={"count": DownloadRecord.count + 1, "updated_at": now},
            )
            .returning(DownloadRecord.count)
        )

        try:
            result = await db.execute(stmt)
            count = result.scalar_one()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error(
                "Failed to record download %s %s %s: %s", project, version, platform, str(e),
            )
            raise DatabaseError(
                message="Failed to record brew download",
                context={
                    "project": project,
                    "version": version,
                    "platform": platform,
                    "error_type": type(e).__name__,
                },
            ) from e

        return count

    async def track_download(self, db: AsyncSession, project: str, filename: str) -> str:
        """
        Record a bottle download and return the URL of the real asset.

        Raises:
            NotFoundError:       unknown project (nothing is written)
            ValidationError:     filename is not a bottle of this project
            DatabaseError:       the counter could not be updated
            HeaderEncodingError: the redirect URL is not a valid header value
        """
        organization, repository = lookup_project(project)

        parsed = parse_bottle_filename(project, filename)
        if parsed is None:
            raise ValidationError(
                message=f"Could not parse filename: {filename}",
                field="filename",
            )
        version, platform = parsed

        count = await self.record_download(db, project, version, platform)
        logger.info("Brew download %s %s (%s) now at %d", project, version, platform, count)

        return build_redirect_url(organization, repository, version, filename)

    async def get_stats(self, db: AsyncSession) -> Dict[str, Dict[str, Any]]:
        """Aggregate all download records. Recomputed on every call."""
        try:
            result = await db.execute(select(DownloadRecord))
            records = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Failed to fetch brew downloads: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch brew downloads from database",
                context={"error_type": type(e).__name__},
            ) from e

        return aggregate_download_stats(records)


brew_service = BrewService()
