"""Datastore error taxonomy.

Only ``ConflictError`` is handled inside the datastore (by the artifact identity
store). Everything else aborts the surrounding transaction and reaches the caller.
"""

from __future__ import annotations


class DatastoreError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DatastoreError):
    """Unknown configuration id, revision or artifact reference."""


class ConflictError(DatastoreError):
    """A concurrent transaction inserted the same unique key first."""


class UnavailableError(DatastoreError):
    """The counter or storage backend could not be reached."""


class ValidationError(DatastoreError):
    """A build record is missing required data or breaks an artifact invariant."""
