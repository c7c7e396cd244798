from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from buildstore.core.errors import ValidationError
from buildstore.models.artifact import Artifact
from buildstore.models.build_configuration import BuildConfigurationAudited
from buildstore.models.build_record import BuildRecord
from buildstore.repositories.build_configurations import BuildConfigurationAuditedRepository
from buildstore.repositories.build_records import BuildRecordRepository
from buildstore.repositories.users import UserRepository
from buildstore.schemas.artifact import ArtifactIn
from buildstore.schemas.build_record import BuildRecordCreate
from buildstore.services.artifact_identity import ArtifactIdentityStore
from buildstore.services.id_allocator import BuildRecordIdAllocator

log = logging.getLogger(__name__)


class StoreCompletedBuild:
    """Persist a finished build and its artifacts in one transaction.

    The record is attached to an audited configuration revision, never to the
    mutable configuration. Candidate artifacts are replaced by their stored
    identities before association. On any failure the transaction is rolled
    back and the error re-raised; the allocated id is then simply unused.

    The session must not have a transaction in progress: the id is allocated on
    a separate connection before the session starts its own.
    """

    def __init__(self, db: Session, allocator: BuildRecordIdAllocator) -> None:
        self._db = db
        self._allocator = allocator
        self._audited = BuildConfigurationAuditedRepository(db)
        self._users = UserRepository(db)
        self._records = BuildRecordRepository(db)
        self._identities = ArtifactIdentityStore(db)

    def execute(self, payload: BuildRecordCreate) -> BuildRecord:
        self._validate(payload)
        record_id = payload.id if payload.id is not None else self._allocator.next_id()

        try:
            audited = self._resolve_configuration(payload)
            user = self._users.find_or_create(payload.user.username, payload.user.email)
            built = self._resolve(payload.built_artifacts)
            dependencies = self._resolve(payload.dependencies)

            record = BuildRecord(
                id=record_id,
                build_configuration_audited=audited,
                build_configuration_id=audited.id,
                build_configuration_rev=audited.rev,
                submit_time=payload.submit_time,
                start_time=payload.start_time,
                end_time=payload.end_time,
                user=user,
                status=payload.status,
                scm_revision=payload.scm_revision,
                built_artifacts=built,
                dependencies=dependencies,
            )
            self._records.add(record)
            self._db.commit()
        except Exception:
            self._db.rollback()
            log.warning("Storing build record %s failed, transaction rolled back", record_id)
            raise

        log.info(
            "Stored build record %s for configuration %s rev %s: %d built, %d dependencies",
            record.id,
            audited.id,
            audited.rev,
            len(record.built_artifacts),
            len(record.dependencies),
        )
        return record

    @staticmethod
    def _validate(payload: BuildRecordCreate) -> None:
        if payload.build_configuration_id is None:
            raise ValidationError("Build record has no build configuration reference")
        if payload.user is None:
            raise ValidationError("Build record has no user")

    def _resolve_configuration(self, payload: BuildRecordCreate) -> BuildConfigurationAudited:
        if payload.build_configuration_rev is not None:
            return self._audited.get_revision(payload.build_configuration_id, payload.build_configuration_rev)
        return self._audited.latest(payload.build_configuration_id)

    def _resolve(self, candidates: list[ArtifactIn]) -> set[Artifact]:
        # built and dependency candidates alike map onto the stored identity
        return {self._identities.resolve(candidate.to_model())[0] for candidate in candidates}
