from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from buildstore.db.base import Base


class RepositoryConfiguration(Base):
    """One source repository seen from the internal mirror and from upstream."""

    __tablename__ = "repository_configurations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    internal_url: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    external_url: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # mirror the external repository before each build
    pre_build_sync_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
