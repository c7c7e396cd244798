import pytest

from buildstore.models import RepositoryConfiguration
from buildstore.services.scm_urls import (
    normalize_scm_url,
    search_by_scm_url,
    with_exact_external_scm_repo_url,
    with_exact_internal_scm_repo_url,
    with_external_scm_repo_url,
    with_internal_scm_repo_url,
)

INTERNAL = "git+ssh://internal.repo.com/repo.git"
EXTERNAL = "https://github.com/external/repo.git"


def test_scheme_and_suffix_variants_normalize_alike():
    assert normalize_scm_url("https://a/b.git") == "a/b"
    assert normalize_scm_url("ssh://a/b") == "a/b"
    assert normalize_scm_url("git+ssh://a/b/") == "a/b"


@pytest.mark.parametrize(
    "url, expected",
    [
        ("repo", "repo"),
        ("github.com/project-ncl/pnc", "github.com/project-ncl/pnc"),
        ("http://host/x.git/", "host/x.git"),
        ("ssh://host/", "host"),
        ("", ""),
    ],
)
def test_normalize_edge_cases(url, expected):
    assert normalize_scm_url(url) == expected


def test_normalize_is_case_sensitive():
    assert normalize_scm_url("https://GitHub.com/A") != normalize_scm_url("https://github.com/a")


def test_predicates_without_database():
    repo = RepositoryConfiguration(internal_url=INTERNAL, external_url=EXTERNAL)

    assert search_by_scm_url("repo")(repo)
    assert not search_by_scm_url("repoX")(repo)
    assert with_exact_internal_scm_repo_url("ssh://internal.repo.com/repo/")(repo)
    assert not with_exact_internal_scm_repo_url("internal.repo.com")(repo)
    assert with_exact_external_scm_repo_url("git://github.com/external/repo")(repo)
    assert with_internal_scm_repo_url("internal.repo.com")(repo)
    assert not with_external_scm_repo_url("internal.repo.com")(repo)


def test_predicates_handle_missing_external_url():
    repo = RepositoryConfiguration(internal_url=INTERNAL, external_url=None)

    assert search_by_scm_url("internal.repo.com")(repo)
    assert not with_external_scm_repo_url("repo")(repo)
    assert not with_exact_external_scm_repo_url("repo")(repo)
