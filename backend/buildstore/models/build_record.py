from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    ForeignKeyConstraint,
    Integer,
    String,
    Table,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from buildstore.db.base import Base
from buildstore.models.artifact import Artifact
from buildstore.models.build_configuration import BuildConfigurationAudited
from buildstore.models.user import User

build_record_built_artifacts = Table(
    "build_record_built_artifacts",
    Base.metadata,
    Column("build_record_id", BigInteger, ForeignKey("build_records.id"), primary_key=True),
    Column("artifact_id", Integer, ForeignKey("artifacts.id"), primary_key=True, index=True),
)

build_record_dependencies = Table(
    "build_record_dependencies",
    Base.metadata,
    Column("build_record_id", BigInteger, ForeignKey("build_records.id"), primary_key=True),
    Column("artifact_id", Integer, ForeignKey("artifacts.id"), primary_key=True, index=True),
)


class BuildStatus(str, enum.Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
    SYSTEM_ERROR = "SYSTEM_ERROR"


class BuildRecord(Base):
    """Outcome of one finished build. Written once, never updated."""

    __tablename__ = "build_records"
    __table_args__ = (
        ForeignKeyConstraint(
            ["build_configuration_id", "build_configuration_rev"],
            ["build_configurations_aud.id", "build_configurations_aud.rev"],
        ),
    )

    # allocated by BuildRecordIdAllocator, never by the database
    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)

    build_configuration_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    build_configuration_rev: Mapped[int] = mapped_column(Integer, nullable=False)

    submit_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status: Mapped[BuildStatus] = mapped_column(
        Enum(BuildStatus, name="build_status"), nullable=False, default=BuildStatus.SUCCESS
    )
    scm_revision: Mapped[str | None] = mapped_column(String(255), nullable=True)

    build_configuration_audited: Mapped[BuildConfigurationAudited] = relationship()
    user: Mapped[User] = relationship()
    built_artifacts: Mapped[set[Artifact]] = relationship(
        secondary=build_record_built_artifacts, collection_class=set
    )
    dependencies: Mapped[set[Artifact]] = relationship(
        secondary=build_record_dependencies, collection_class=set
    )
