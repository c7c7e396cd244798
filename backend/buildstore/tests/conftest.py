from __future__ import annotations

from datetime import datetime

import pytest
from sqlalchemy.orm import Session

from buildstore.db.session import create_db_engine, create_session_factory
from buildstore.init_db import init_db
from buildstore.models import (
    BuildConfiguration,
    BuildConfigurationAudited,
    RepoType,
    RepositoryConfiguration,
)
from buildstore.repositories.build_configurations import BuildConfigurationRepository
from buildstore.schemas.artifact import ArtifactIn
from buildstore.schemas.build_record import BuildRecordCreate
from buildstore.schemas.user import UserIn
from buildstore.services.id_allocator import BuildRecordIdAllocator

BUILD_TIME = datetime(2026, 1, 1, 12, 0, 0)


@pytest.fixture()
def engine(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'buildstore.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture()
def allocator(engine) -> BuildRecordIdAllocator:
    return BuildRecordIdAllocator(engine)


def record_revision(db: Session, config: BuildConfiguration, rev: int) -> BuildConfigurationAudited:
    """Stand-in for the audit producer: snapshot ``config`` as revision ``rev``."""
    audited = BuildConfigurationAudited(
        id=config.id,
        rev=rev,
        name=config.name,
        build_script=config.build_script,
        project=config.project,
        environment=config.environment,
        scm_revision=config.scm_revision,
        repository_configuration_id=config.repository_configuration_id,
    )
    db.add(audited)
    db.flush()
    return audited


@pytest.fixture()
def build_config(session_factory) -> BuildConfiguration:
    with session_factory() as db:
        repo = RepositoryConfiguration(internal_url="github.com/project-ncl/pnc")
        db.add(repo)
        db.flush()
        config = BuildConfigurationRepository(db).save(
            BuildConfiguration(
                name="test build config",
                build_script="mvn deploy",
                project="Test Project 1",
                environment="12345",
                repository_configuration_id=repo.id,
            )
        )
        record_revision(db, config, rev=1)
        db.commit()
        return config


def artifact(n: int, **overrides) -> ArtifactIn:
    fields = dict(
        identifier=f"org.jboss.test:artifact{n}",
        repo_type=RepoType.MAVEN,
        md5=f"md-fake-{n}",
        sha1=f"sha1-fake-{n}",
        sha256=f"sha256-fake-{n}",
        size=111 * n,
    )
    fields.update(overrides)
    return ArtifactIn(**fields)


def imported_artifact(n: int, **overrides) -> ArtifactIn:
    overrides.setdefault("origin_url", f"http://test/artifact{n}.jar")
    overrides.setdefault("import_date", BUILD_TIME)
    return artifact(n, **overrides)


def completed_build(config_id: int | None, built=(), dependencies=(), username="pnc", **overrides) -> BuildRecordCreate:
    fields = dict(
        build_configuration_id=config_id,
        submit_time=BUILD_TIME,
        start_time=BUILD_TIME,
        end_time=BUILD_TIME,
        user=UserIn(username=username, email=f"{username}@redhat.com"),
        built_artifacts=list(built),
        dependencies=list(dependencies),
    )
    fields.update(overrides)
    return BuildRecordCreate(**fields)
