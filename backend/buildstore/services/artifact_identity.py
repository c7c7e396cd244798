from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from buildstore.core.errors import ConflictError
from buildstore.models.artifact import Artifact
from buildstore.repositories.artifacts import ArtifactRepository

log = logging.getLogger(__name__)


class ArtifactIdentityStore:
    """Maps candidate artifacts onto stored rows, one row per content identity.

    The dedup key is the checksum tuple, or (identifier, repo_type) when the
    candidate has no checksum. Lookups go through the caller's session, so rows
    inserted earlier in the same transaction are found as well.
    """

    def __init__(self, db: Session) -> None:
        self._db = db
        self._artifacts = ArtifactRepository(db)

    def resolve(self, candidate: Artifact) -> tuple[Artifact, bool]:
        """Return ``(stored, was_new)`` for ``candidate``.

        An existing row is returned unchanged even when the candidate carries
        different size or origin metadata. A new candidate is inserted under a
        SAVEPOINT; if a concurrent transaction committed the same key first the
        insert fails on the unique index and the winner's row is returned.
        """
        existing = self._find(candidate)
        if existing is not None:
            return existing, False
        try:
            return self._insert(candidate), True
        except ConflictError as conflict:
            existing = self._find(candidate)
            if existing is None:
                # not a dedup race: some other constraint failed
                raise conflict.__cause__
            log.info("%s; reusing stored artifact %s", conflict.message, existing.id)
            return existing, False

    def _find(self, candidate: Artifact) -> Artifact | None:
        if candidate.has_checksum:
            return self._artifacts.find_by_checksums(candidate.md5, candidate.sha1, candidate.sha256)
        return self._artifacts.find_by_identifier(candidate.identifier, candidate.repo_type)

    def _insert(self, candidate: Artifact) -> Artifact:
        try:
            with self._db.begin_nested():
                self._db.add(candidate)
        except IntegrityError as e:
            raise ConflictError(f"Artifact {candidate.identifier} was inserted concurrently") from e
        return candidate
