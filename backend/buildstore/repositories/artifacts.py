from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from buildstore.models.artifact import Artifact, RepoType


class ArtifactRepository:
    def __init__(self, db: Session) -> None:
        self._db = db

    def list(self) -> list[Artifact]:
        stmt = select(Artifact).order_by(Artifact.id.asc())
        return list(self._db.execute(stmt).scalars().all())

    def count(self) -> int:
        return int(self._db.execute(select(func.count()).select_from(Artifact)).scalar_one())

    def find_by_checksums(self, md5: str | None, sha1: str | None, sha256: str | None) -> Artifact | None:
        # == None renders IS NULL, so a missing digest only matches a missing digest
        stmt = select(Artifact).where(
            Artifact.md5 == md5,
            Artifact.sha1 == sha1,
            Artifact.sha256 == sha256,
        )
        return self._db.execute(stmt).scalars().first()

    def find_by_identifier(self, identifier: str, repo_type: RepoType) -> Artifact | None:
        """Checksum-less artifact with this identifier, if one was stored."""
        stmt = select(Artifact).where(
            Artifact.identifier == identifier,
            Artifact.repo_type == repo_type,
            Artifact.md5.is_(None),
            Artifact.sha1.is_(None),
            Artifact.sha256.is_(None),
        )
        return self._db.execute(stmt).scalars().first()
