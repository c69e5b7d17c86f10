from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Optional, TypeVar

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from .errors import StorageError


logger = logging.getLogger(__name__)

T = TypeVar("T")

_current_session: ContextVar[Optional[Session]] = ContextVar(
    "account_transfer_session", default=None
)


def current_session() -> Optional[Session]:
    """Return the session bound by the innermost active transaction, if any."""
    return _current_session.get()


class TransactionRunner:
    """Runs a unit of work inside one database transaction.

    The session opened for the unit of work is bound to the calling context,
    so repository calls made by the work join the same transaction. The
    transaction commits when the work returns and rolls back when it raises;
    the session is closed on every exit path.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        with Session(self.engine, expire_on_commit=False) as session:
            session.begin()
            token = _current_session.set(session)
            try:
                yield session
            except Exception as exc:
                logger.warning(
                    "transaction.rollback",
                    extra={"error_type": type(exc).__name__, "error": str(exc)},
                )
                self._rollback(session)
                raise
            else:
                self._commit(session)
            finally:
                _current_session.reset(token)

    def run_in_transaction(self, work: Callable[[Session], T]) -> T:
        with self.transaction() as session:
            return work(session)

    # ------------------------------------------------------------------
    # Helper utilities
    # ------------------------------------------------------------------
    def _commit(self, session: Session) -> None:
        try:
            session.commit()
        except SQLAlchemyError as exc:
            logger.error("transaction.commit_failed", extra={"error": str(exc)})
            self._rollback(session)
            raise StorageError("Failed to commit transaction") from exc

    def _rollback(self, session: Session) -> None:
        # The caller re-raises the failure that triggered the rollback.
        try:
            session.rollback()
        except SQLAlchemyError:
            logger.exception("transaction.rollback_failed")
