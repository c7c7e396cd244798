"""SCM URL matching for repository configuration lookup.

Stored and queried URLs are compared after ``normalize_scm_url``, so that
``git+ssh://host/repo.git``, ``https://host/repo`` and ``host/repo/`` all refer to
the same repository.

Each predicate carries two parts:

- ``clause``: a SQL condition on the raw column. It is only a prefilter: a
  normalized URL is a substring of the raw URL, so anything matching the
  normalized form also contains the normalized query verbatim.
- ``test``: the exact check over normalized values, applied to the rows the
  prefilter returns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from sqlalchemy import ColumnElement, or_

from buildstore.models.repository_configuration import RepositoryConfiguration

_SCHEME_SEPARATOR = "://"
_GIT_SUFFIX = ".git"


def normalize_scm_url(url: str) -> str:
    """Strip the scheme, then a trailing ``.git``, then a trailing ``/``."""
    _, sep, rest = url.partition(_SCHEME_SEPARATOR)
    normalized = rest if sep else url
    if normalized.endswith(_GIT_SUFFIX):
        normalized = normalized[: -len(_GIT_SUFFIX)]
    if normalized.endswith("/"):
        normalized = normalized[:-1]
    return normalized


@dataclass(frozen=True)
class Predicate:
    clause: ColumnElement[bool]
    test: Callable[[RepositoryConfiguration], bool]

    def __call__(self, repo: RepositoryConfiguration) -> bool:
        return self.test(repo)


def _normalized(url: str | None) -> str | None:
    return None if url is None else normalize_scm_url(url)


def _contains(query: str, url: str | None) -> bool:
    stored = _normalized(url)
    return stored is not None and query in stored


def search_by_scm_url(scm_url: str) -> Predicate:
    """Normalized ``scm_url`` occurs in the internal or the external URL."""
    query = normalize_scm_url(scm_url)
    return Predicate(
        clause=or_(
            RepositoryConfiguration.internal_url.contains(query, autoescape=True),
            RepositoryConfiguration.external_url.contains(query, autoescape=True),
        ),
        test=lambda repo: _contains(query, repo.internal_url) or _contains(query, repo.external_url),
    )


def with_internal_scm_repo_url(internal_url: str) -> Predicate:
    query = normalize_scm_url(internal_url)
    return Predicate(
        clause=RepositoryConfiguration.internal_url.contains(query, autoescape=True),
        test=lambda repo: _contains(query, repo.internal_url),
    )


def with_external_scm_repo_url(external_url: str) -> Predicate:
    query = normalize_scm_url(external_url)
    return Predicate(
        clause=RepositoryConfiguration.external_url.contains(query, autoescape=True),
        test=lambda repo: _contains(query, repo.external_url),
    )


def with_exact_internal_scm_repo_url(internal_url: str) -> Predicate:
    query = normalize_scm_url(internal_url)
    return Predicate(
        clause=RepositoryConfiguration.internal_url.contains(query, autoescape=True),
        test=lambda repo: _normalized(repo.internal_url) == query,
    )


def with_exact_external_scm_repo_url(external_url: str) -> Predicate:
    query = normalize_scm_url(external_url)
    return Predicate(
        clause=RepositoryConfiguration.external_url.contains(query, autoescape=True),
        test=lambda repo: _normalized(repo.external_url) == query,
    )
