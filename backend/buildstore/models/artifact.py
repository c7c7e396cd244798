from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Enum, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from buildstore.db.base import Base

_HAS_CHECKSUM = "md5 IS NOT NULL OR sha1 IS NOT NULL OR sha256 IS NOT NULL"
_NO_CHECKSUM = "md5 IS NULL AND sha1 IS NULL AND sha256 IS NULL"


class RepoType(str, enum.Enum):
    MAVEN = "MAVEN"
    NPM = "NPM"
    GENERIC_PROXY = "GENERIC_PROXY"
    DISTRIBUTION_ARCHIVE = "DISTRIBUTION_ARCHIVE"


class Artifact(Base):
    """A build output or input, identified by its content.

    One row per checksum tuple. Artifacts without any checksum are identified by
    (identifier, repo_type) instead.
    """

    __tablename__ = "artifacts"
    __table_args__ = (
        Index(
            "uq_artifacts_checksums",
            "md5",
            "sha1",
            "sha256",
            unique=True,
            postgresql_nulls_not_distinct=True,
            postgresql_where=text(_HAS_CHECKSUM),
            sqlite_where=text(_HAS_CHECKSUM),
        ),
        Index(
            "uq_artifacts_identifier_repo_type",
            "identifier",
            "repo_type",
            unique=True,
            postgresql_where=text(_NO_CHECKSUM),
            sqlite_where=text(_NO_CHECKSUM),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    identifier: Mapped[str] = mapped_column(String(1024), nullable=False, index=True)
    repo_type: Mapped[RepoType] = mapped_column(Enum(RepoType, name="repo_type"), nullable=False)

    md5: Mapped[str | None] = mapped_column(String(32), nullable=True)
    sha1: Mapped[str | None] = mapped_column(String(40), nullable=True)
    sha256: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    size: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    filename: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # only set when pulled from outside rather than produced by a build
    origin_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    import_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    @property
    def checksums(self) -> tuple[str | None, str | None, str | None]:
        return self.md5, self.sha1, self.sha256

    @property
    def has_checksum(self) -> bool:
        return any(self.checksums)

    @property
    def is_imported(self) -> bool:
        return self.origin_url is not None

    def __repr__(self) -> str:
        return f"Artifact(id={self.id!r}, identifier={self.identifier!r}, sha256={self.sha256!r})"
