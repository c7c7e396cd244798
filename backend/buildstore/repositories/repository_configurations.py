from __future__ import annotations

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from buildstore.models.repository_configuration import RepositoryConfiguration
from buildstore.services.scm_urls import Predicate


class RepositoryConfigurationRepository:
    def __init__(self, db: Session) -> None:
        self._db = db

    def save(self, repo: RepositoryConfiguration) -> RepositoryConfiguration:
        self._db.add(repo)
        self._db.flush()
        return repo

    def query_with_predicates(self, *predicates: Predicate) -> list[RepositoryConfiguration]:
        """Repository configurations satisfying every predicate (all of them, AND)."""
        stmt = select(RepositoryConfiguration).order_by(RepositoryConfiguration.id.asc())
        if predicates:
            stmt = stmt.where(and_(*(p.clause for p in predicates)))
        candidates = self._db.execute(stmt).scalars().all()
        return [repo for repo in candidates if all(p.test(repo) for p in predicates)]
