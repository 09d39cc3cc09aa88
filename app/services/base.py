# app/services/base.py
# Role: Shared unit-of-work handling for the session-bound services.
#       Turns driver errors into the typed errors of app/errors.py.

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import Conflict, InternalError

logger = logging.getLogger(__name__)


class SessionService:
    """
    Base for services that wrap one SQLAlchemy session.

    Every write goes through unit_of_work(). The outermost block commits on
    success and rolls back on any exception; nested blocks join the outer one,
    so a caller can group several service calls into a single commit.
    """

    def __init__(self, session: Session):
        self.session = session
        self._depth = 0

    @contextmanager
    def unit_of_work(
        self,
        conflict_message: str | None = None,
        lock: bool = False,
    ) -> Iterator[Session]:
        """
        lock=True makes the outermost block take the database write lock
        before its first statement (BEGIN IMMEDIATE on SQLite), so rows it
        reads cannot be changed by another session until it commits.
        """
        if self._depth > 0:
            self._depth += 1
            try:
                yield self.session
            finally:
                self._depth -= 1
            return

        self._depth = 1
        try:
            if lock:
                self._begin_locked()
            yield self.session
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.warning("Unique/foreign key violation: %s", e.orig)
            raise Conflict(conflict_message) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("Database error")
            raise InternalError() from e
        except Exception:
            self.session.rollback()
            raise
        finally:
            self._depth = 0

    def _begin_locked(self) -> None:
        if self.session.in_transaction():
            # The lock is only taken at BEGIN, so close the open read transaction
            self.session.commit()
        self.session.connection(execution_options={"sqlite_begin": "IMMEDIATE"})
