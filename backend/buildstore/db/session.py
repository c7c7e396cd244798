from __future__ import annotations

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

from buildstore.core.config import settings


def create_db_engine(url: str | None = None) -> Engine:
    """Create an engine for ``url`` (defaults to ``settings.database_url``).

    pysqlite defers BEGIN until the first DML statement, which breaks SAVEPOINT
    and lets two writers deadlock on lock upgrade. For SQLite the driver's own
    transaction handling is switched off and every transaction starts with
    BEGIN IMMEDIATE, so writers queue on the busy timeout instead.
    """
    url = url or settings.database_url
    if make_url(url).get_backend_name() != "sqlite":
        return create_engine(url, echo=settings.db_echo, pool_pre_ping=settings.db_pool_pre_ping)

    engine = create_engine(
        url,
        echo=settings.db_echo,
        connect_args={"timeout": settings.sqlite_busy_timeout_seconds},
    )

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


engine = create_db_engine()
SessionLocal = create_session_factory(engine)
