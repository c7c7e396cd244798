from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from buildstore.db.base import Base


class BuildConfiguration(Base):
    """Current, user-editable definition of how to build something."""

    __tablename__ = "build_configurations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    build_script: Mapped[str] = mapped_column(Text, nullable=False, default="")
    project: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    environment: Mapped[str] = mapped_column(String(255), nullable=False, default="")  # system image id
    scm_revision: Mapped[str | None] = mapped_column(String(255), nullable=True)

    repository_configuration_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("repository_configurations.id"), nullable=True, index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class BuildConfigurationAudited(Base):
    """Immutable copy of a BuildConfiguration taken at one revision.

    Rows are written by the audit producer whenever a configuration is saved and
    are never updated or deleted here. No foreign key to ``build_configurations``:
    the history outlives the configuration it describes.
    """

    __tablename__ = "build_configurations_aud"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    rev: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    build_script: Mapped[str] = mapped_column(Text, nullable=False, default="")
    project: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    environment: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    scm_revision: Mapped[str | None] = mapped_column(String(255), nullable=True)
    repository_configuration_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    revision_time: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
