from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from buildstore.core.errors import NotFoundError
from buildstore.models.build_configuration import BuildConfiguration, BuildConfigurationAudited


class BuildConfigurationRepository:
    def __init__(self, db: Session) -> None:
        self._db = db

    def save(self, config: BuildConfiguration) -> BuildConfiguration:
        self._db.add(config)
        self._db.flush()
        return config

    def get(self, config_id: int) -> BuildConfiguration | None:
        return self._db.get(BuildConfiguration, config_id)

    def list(self) -> list[BuildConfiguration]:
        stmt = select(BuildConfiguration).order_by(BuildConfiguration.id.asc())
        return list(self._db.execute(stmt).scalars().all())


class BuildConfigurationAuditedRepository:
    """Read-only access to the revision history of build configurations."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def revisions_of(self, config_id: int) -> list[BuildConfigurationAudited]:
        """All snapshots of ``config_id``, most recent revision first.

        Raises NotFoundError when the configuration has no recorded revision.
        """
        stmt = (
            select(BuildConfigurationAudited)
            .where(BuildConfigurationAudited.id == config_id)
            .order_by(BuildConfigurationAudited.rev.desc())
        )
        revisions = list(self._db.execute(stmt).scalars().all())
        if not revisions:
            raise NotFoundError(f"Build configuration {config_id} has no audited revision")
        return revisions

    def latest(self, config_id: int) -> BuildConfigurationAudited:
        return self.revisions_of(config_id)[0]

    def get_revision(self, config_id: int, rev: int) -> BuildConfigurationAudited:
        audited = self._db.get(BuildConfigurationAudited, (config_id, rev))
        if audited is None:
            raise NotFoundError(f"Build configuration {config_id} has no revision {rev}")
        return audited
