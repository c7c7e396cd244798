import pytest

from buildstore.models import RepositoryConfiguration
from buildstore.repositories.repository_configurations import RepositoryConfigurationRepository
from buildstore.services.scm_urls import (
    search_by_scm_url,
    with_exact_external_scm_repo_url,
    with_exact_internal_scm_repo_url,
    with_external_scm_repo_url,
    with_internal_scm_repo_url,
)

INTERNAL = "git+ssh://internal.repo.com/repo.git"
EXTERNAL = "https://github.com/external/repo.git"


@pytest.fixture()
def db(session_factory):
    with session_factory() as db:
        repos = RepositoryConfigurationRepository(db)
        repos.save(RepositoryConfiguration(internal_url=INTERNAL, external_url=EXTERNAL))
        repos.save(RepositoryConfiguration(internal_url="git+ssh://internal.example.com/other.git"))
        db.commit()
        yield db


def query(db, *predicates):
    return RepositoryConfigurationRepository(db).query_with_predicates(*predicates)


@pytest.mark.parametrize(
    "predicate",
    [
        search_by_scm_url("repo"),
        search_by_scm_url("ssh://internal.repo.com/repo.git"),
        search_by_scm_url("http://internal.repo.com/repo.git"),
        search_by_scm_url("https://github.com/external/repo"),
        with_exact_internal_scm_repo_url(INTERNAL),
        with_exact_external_scm_repo_url("http://github.com/external/repo/"),
        with_internal_scm_repo_url("ssh://internal.repo.com/repo"),
        with_external_scm_repo_url("http://github.com/external/repo.git"),
    ],
)
def test_repository_is_found(db, predicate):
    found = query(db, predicate)
    assert [r.internal_url for r in found] == [INTERNAL]


@pytest.mark.parametrize(
    "predicate",
    [
        search_by_scm_url("repoX"),
        with_internal_scm_repo_url("http://github.com/external/repo.git"),
        with_external_scm_repo_url("ssh://internal.repo.com/"),
        with_exact_internal_scm_repo_url("ssh://internal.repo.com/"),
        with_exact_external_scm_repo_url(INTERNAL),
    ],
)
def test_repository_is_not_found(db, predicate):
    assert query(db, predicate) == []


def test_partial_url_matches_every_repository_containing_it(db):
    found = query(db, with_internal_scm_repo_url("ssh://internal."))
    assert len(found) == 2


def test_predicates_are_combined_with_and(db):
    assert len(query(db, search_by_scm_url("internal."))) == 2
    found = query(db, search_by_scm_url("internal."), with_external_scm_repo_url("github.com"))
    assert [r.internal_url for r in found] == [INTERNAL]
    assert query(db, with_internal_scm_repo_url("other"), with_external_scm_repo_url("github.com")) == []


def test_no_predicate_returns_all(db):
    assert len(query(db)) == 2


def test_like_wildcards_in_query_are_literal(db):
    assert query(db, search_by_scm_url("internal%repo")) == []
    assert query(db, search_by_scm_url("re_o")) == []
