from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from buildstore.models.build_record import BuildRecord


class BuildRecordRepository:
    def __init__(self, db: Session) -> None:
        self._db = db

    def add(self, record: BuildRecord) -> BuildRecord:
        self._db.add(record)
        self._db.flush()
        return record

    def get(self, record_id: int) -> BuildRecord | None:
        stmt = (
            select(BuildRecord)
            .where(BuildRecord.id == record_id)
            .options(selectinload(BuildRecord.built_artifacts), selectinload(BuildRecord.dependencies))
        )
        return self._db.execute(stmt).scalars().first()

    def list_for_configuration(self, config_id: int, limit: int = 50) -> list[BuildRecord]:
        stmt = (
            select(BuildRecord)
            .where(BuildRecord.build_configuration_id == config_id)
            .order_by(BuildRecord.end_time.desc())
            .limit(limit)
        )
        return list(self._db.execute(stmt).scalars().all())

    def count(self) -> int:
        return int(self._db.execute(select(func.count()).select_from(BuildRecord)).scalar_one())
