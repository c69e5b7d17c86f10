from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from ..core.errors import AccountNotFoundError, DuplicateAccountError, StorageError
from ..core.transaction import current_session
from ..models import AccountModel


logger = logging.getLogger(__name__)


class AccountRepository:
    """Thin data access layer around the ``member`` table.

    Inside ``TransactionRunner.run_in_transaction`` every call joins the
    runner's session. Outside of it each call opens its own session and
    commits before returning.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    @contextmanager
    def _session(self) -> Iterator[Session]:
        active = current_session()
        try:
            if active is not None:
                yield active
            else:
                with Session(self.engine, expire_on_commit=False) as session:
                    yield session
                    session.commit()
        # The driver raises OverflowError for integers beyond a 64-bit column.
        except (SQLAlchemyError, OverflowError) as exc:
            logger.error("storage.error", extra={"error": str(exc)})
            raise StorageError(str(exc)) from exc

    # Account operations -------------------------------------------------
    def save(self, account: AccountModel) -> AccountModel:
        with self._session() as session:
            if session.get(AccountModel, account.member_id) is not None:
                raise DuplicateAccountError(f"Account {account.member_id} already exists")
            session.add(account)
            try:
                session.flush()
            except IntegrityError as exc:
                raise DuplicateAccountError(
                    f"Account {account.member_id} already exists"
                ) from exc
            return account

    def find_by_id(self, member_id: str) -> AccountModel:
        with self._session() as session:
            account = session.get(AccountModel, member_id)
            if account is None:
                raise AccountNotFoundError(f"Account {member_id} not found")
            return account

    def update_balance(self, member_id: str, money: int) -> AccountModel:
        with self._session() as session:
            account = session.get(AccountModel, member_id)
            if account is None:
                raise AccountNotFoundError(f"Account {member_id} not found")
            account.money = money
            session.add(account)
            session.flush()
            return account

    def delete(self, member_id: str) -> None:
        with self._session() as session:
            account = session.get(AccountModel, member_id)
            if account is None:
                return
            session.delete(account)
            session.flush()
