from datetime import datetime

from pydantic import BaseModel, Field

from buildstore.models.artifact import Artifact, RepoType


class ArtifactIn(BaseModel):
    identifier: str = Field(..., max_length=1024)
    repo_type: RepoType = RepoType.MAVEN
    md5: str | None = Field(None, max_length=32)
    sha1: str | None = Field(None, max_length=40)
    sha256: str | None = Field(None, max_length=64)
    size: int | None = Field(None, ge=0)
    filename: str | None = None
    origin_url: str | None = None
    import_date: datetime | None = None

    def to_model(self) -> Artifact:
        return Artifact(**self.model_dump())


class ArtifactOut(BaseModel):
    id: int
    identifier: str
    repo_type: RepoType
    md5: str | None
    sha1: str | None
    sha256: str | None
    size: int | None
    filename: str | None
    origin_url: str | None
    import_date: datetime | None
    created_at: datetime

    class Config:
        from_attributes = True
