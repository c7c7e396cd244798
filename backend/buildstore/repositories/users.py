from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from buildstore.models.user import User

log = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, db: Session) -> None:
        self._db = db

    def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        return self._db.execute(stmt).scalars().first()

    def find_or_create(self, username: str, email: str) -> User:
        """Return the user named ``username``, creating it on first reference."""
        user = self.get_by_username(username)
        if user:
            return user
        try:
            with self._db.begin_nested():
                user = User(username=username, email=email)
                self._db.add(user)
        except IntegrityError:
            log.info("User %s created concurrently, reusing it", username)
            user = self.get_by_username(username)
            if user is None:
                raise
        return user
