"""Create the schema and seed the build record id counter.

Tables are created from the ORM metadata; existing tables are left alone.
"""

from __future__ import annotations

import logging

from sqlalchemy import Engine, select

from buildstore.core.config import settings
from buildstore.db.base import Base
from buildstore.models import IdCounter

log = logging.getLogger(__name__)


def init_db(engine: Engine) -> None:
    Base.metadata.create_all(engine)
    with engine.begin() as conn:
        name = settings.build_record_id_counter
        exists = conn.execute(select(IdCounter.name).where(IdCounter.name == name)).first()
        if not exists:
            conn.execute(IdCounter.__table__.insert().values(name=name, value=0))
            log.info("Seeded id counter %s", name)


def main() -> None:
    from buildstore.db.session import engine

    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    init_db(engine)
    log.info("DB schema created.")


if __name__ == "__main__":
    main()
