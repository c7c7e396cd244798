from sqlalchemy import BigInteger, Sequence, String
from sqlalchemy.orm import Mapped, mapped_column

from buildstore.core.config import settings
from buildstore.db.base import Base

# Created by metadata.create_all only on dialects that support sequences.
build_record_id_seq = Sequence(settings.build_record_id_sequence, start=1, metadata=Base.metadata)


class IdCounter(Base):
    """Named counter row, used for build record ids where there is no native sequence."""

    __tablename__ = "id_counters"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
