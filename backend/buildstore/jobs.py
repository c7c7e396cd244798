from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from buildstore.db.session import SessionLocal, engine
from buildstore.schemas.build_record import BuildRecordCreate, BuildRecordOut
from buildstore.services.id_allocator import BuildRecordIdAllocator
from buildstore.use_cases.store_completed_build import StoreCompletedBuild

log = logging.getLogger(__name__)


def store_completed_build_job(payload: dict[str, Any], session_factory=None, allocator=None) -> dict[str, Any]:
    """Entry point for build-completion workers. Returns the stored record as JSON data."""
    build = BuildRecordCreate.model_validate(payload)
    factory = session_factory or SessionLocal
    if allocator is None:
        # ids come from the database the session writes to
        allocator = BuildRecordIdAllocator(getattr(factory, "kw", {}).get("bind") or engine)

    db: Session = factory()
    try:
        record = StoreCompletedBuild(db, allocator).execute(build)
        return BuildRecordOut.model_validate(record).model_dump(mode="json")
    except Exception as e:
        log.exception("Storing completed build for configuration %s failed: %s: %s",
                      build.build_configuration_id, type(e).__name__, e)
        raise
    finally:
        db.close()
