from __future__ import annotations

import logging

from sqlalchemy import Engine, select, update
from sqlalchemy.exc import InterfaceError, OperationalError

from buildstore.core.config import settings
from buildstore.core.errors import UnavailableError
from buildstore.models.id_counter import IdCounter, build_record_id_seq

log = logging.getLogger(__name__)


class BuildRecordIdAllocator:
    """Hands out build record ids that are never reused.

    Ids are unique, not gap-free: every call consumes a value in its own
    transaction, whatever happens to the transaction that uses it. A native
    sequence is used where the database has one, otherwise the ``id_counters``
    row named ``counter_name`` is incremented under its row lock.
    """

    def __init__(self, engine: Engine, counter_name: str | None = None) -> None:
        self._engine = engine
        self._counter_name = counter_name or settings.build_record_id_counter

    def next_id(self) -> int:
        try:
            with self._engine.begin() as conn:
                if self._engine.dialect.supports_sequences:
                    value = conn.execute(select(build_record_id_seq.next_value())).scalar_one()
                else:
                    value = self._increment_counter(conn)
        except (OperationalError, InterfaceError) as e:
            log.error("Build record id allocation failed: %s", e)
            raise UnavailableError("Build record id counter is unavailable") from e
        log.debug("Allocated build record id %s", value)
        return int(value)

    def _increment_counter(self, conn) -> int:
        res = conn.execute(
            update(IdCounter)
            .where(IdCounter.name == self._counter_name)
            .values(value=IdCounter.value + 1)
        )
        if res.rowcount != 1:
            raise UnavailableError(f"Id counter {self._counter_name!r} is not initialised")
        return conn.execute(select(IdCounter.value).where(IdCounter.name == self._counter_name)).scalar_one()
