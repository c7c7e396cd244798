from buildstore.models.artifact import Artifact, RepoType
from buildstore.models.build_configuration import BuildConfiguration, BuildConfigurationAudited
from buildstore.models.build_record import (
    BuildRecord,
    BuildStatus,
    build_record_built_artifacts,
    build_record_dependencies,
)
from buildstore.models.id_counter import IdCounter, build_record_id_seq
from buildstore.models.repository_configuration import RepositoryConfiguration
from buildstore.models.user import User

__all__ = [
    "Artifact",
    "BuildConfiguration",
    "BuildConfigurationAudited",
    "BuildRecord",
    "BuildStatus",
    "IdCounter",
    "RepoType",
    "RepositoryConfiguration",
    "User",
    "build_record_built_artifacts",
    "build_record_dependencies",
    "build_record_id_seq",
]
