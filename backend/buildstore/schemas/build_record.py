from datetime import datetime

from pydantic import BaseModel, Field

from buildstore.models.build_record import BuildStatus
from buildstore.schemas.artifact import ArtifactIn, ArtifactOut
from buildstore.schemas.user import UserIn


class BuildRecordCreate(BaseModel):
    """A finished build as reported by a build worker, before it is stored.

    The configuration is referenced by id (latest revision is used) or by id and
    revision. ``id`` is normally left empty and allocated on store.
    """

    id: int | None = None
    build_configuration_id: int | None = None
    build_configuration_rev: int | None = None

    submit_time: datetime
    start_time: datetime
    end_time: datetime

    user: UserIn | None = None
    status: BuildStatus = BuildStatus.SUCCESS
    scm_revision: str | None = None

    built_artifacts: list[ArtifactIn] = Field(default_factory=list)
    dependencies: list[ArtifactIn] = Field(default_factory=list)


class BuildRecordOut(BaseModel):
    id: int
    build_configuration_id: int
    build_configuration_rev: int
    submit_time: datetime
    start_time: datetime
    end_time: datetime
    user_id: int
    status: BuildStatus
    scm_revision: str | None
    built_artifacts: list[ArtifactOut]
    dependencies: list[ArtifactOut]

    class Config:
        from_attributes = True
