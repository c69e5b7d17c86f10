import logging

import pytest
from sqlalchemy import event
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlmodel import Session

from ..core.errors import AccountNotFoundError, StorageError
from ..core.transaction import TransactionRunner, current_session
from ..models import AccountModel
from ..services import AccountRepository


@pytest.fixture
def pool_events(engine):
    counts = {"checkout": 0, "checkin": 0}

    def on_checkout(*args):
        counts["checkout"] += 1

    def on_checkin(*args):
        counts["checkin"] += 1

    event.listen(engine, "checkout", on_checkout)
    event.listen(engine, "checkin", on_checkin)
    yield counts
    event.remove(engine, "checkout", on_checkout)
    event.remove(engine, "checkin", on_checkin)


def test_commits_when_work_returns(
    runner: TransactionRunner, repository: AccountRepository
) -> None:
    def work(session: Session) -> str:
        repository.save(AccountModel(member_id="memberA", money=10000))
        repository.update_balance("memberA", 9000)
        return "done"

    assert runner.run_in_transaction(work) == "done"
    assert repository.find_by_id("memberA").money == 9000


def test_rolls_back_and_reraises_original_error(
    runner: TransactionRunner, repository: AccountRepository
) -> None:
    repository.save(AccountModel(member_id="memberA", money=10000))

    def work(session: Session) -> None:
        repository.update_balance("memberA", 0)
        repository.save(AccountModel(member_id="memberB", money=500))
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        runner.run_in_transaction(work)

    assert repository.find_by_id("memberA").money == 10000
    with pytest.raises(AccountNotFoundError):
        repository.find_by_id("memberB")


def test_work_receives_session_bound_to_context(runner: TransactionRunner) -> None:
    assert current_session() is None

    def work(session: Session) -> bool:
        return current_session() is session

    assert runner.run_in_transaction(work) is True
    assert current_session() is None


def test_binding_is_cleared_after_failure(runner: TransactionRunner) -> None:
    def work(session: Session) -> None:
        raise ValueError("bad input")

    with pytest.raises(ValueError):
        runner.run_in_transaction(work)

    assert current_session() is None


def test_each_call_uses_a_fresh_session(runner: TransactionRunner) -> None:
    sessions = []

    def work(session: Session) -> None:
        sessions.append(session)

    runner.run_in_transaction(work)
    runner.run_in_transaction(work)

    assert sessions[0] is not sessions[1]


def test_connection_released_on_success(
    runner: TransactionRunner, repository: AccountRepository, pool_events
) -> None:
    def work(session: Session) -> None:
        repository.save(AccountModel(member_id="memberA", money=10000))

    runner.run_in_transaction(work)

    assert pool_events["checkout"] == 1
    assert pool_events["checkin"] == 1


def test_connection_released_on_failure(
    runner: TransactionRunner, repository: AccountRepository, pool_events
) -> None:
    def work(session: Session) -> None:
        repository.save(AccountModel(member_id="memberA", money=10000))
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        runner.run_in_transaction(work)

    assert pool_events["checkout"] == 1
    assert pool_events["checkin"] == 1


def test_rollback_failure_is_logged_and_original_error_surfaces(
    runner: TransactionRunner,
    repository: AccountRepository,
    pool_events,
    monkeypatch,
    caplog,
) -> None:
    def failing_rollback(self) -> None:
        raise SQLAlchemyError("rollback failed")

    monkeypatch.setattr(Session, "rollback", failing_rollback)

    def work(session: Session) -> None:
        repository.save(AccountModel(member_id="memberA", money=10000))
        raise RuntimeError("boom")

    with caplog.at_level(logging.ERROR):
        with pytest.raises(RuntimeError, match="boom"):
            runner.run_in_transaction(work)

    assert "transaction.rollback_failed" in [record.getMessage() for record in caplog.records]
    assert pool_events["checkin"] == pool_events["checkout"] == 1

    monkeypatch.undo()
    with pytest.raises(AccountNotFoundError):
        repository.find_by_id("memberA")


def test_commit_failure_raises_storage_error(
    runner: TransactionRunner, repository: AccountRepository, monkeypatch
) -> None:
    def failing_commit(self) -> None:
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(Session, "commit", failing_commit)

    def work(session: Session) -> None:
        repository.save(AccountModel(member_id="memberA", money=10000))

    with pytest.raises(StorageError) as excinfo:
        runner.run_in_transaction(work)

    assert isinstance(excinfo.value.__cause__, OperationalError)
    assert current_session() is None

    monkeypatch.undo()
    with pytest.raises(AccountNotFoundError):
        repository.find_by_id("memberA")
