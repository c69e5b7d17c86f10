from collections.abc import Iterator

import pytest
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from ..core.db import create_engine_for_url
from ..core.transaction import TransactionRunner
from ..services import AccountRepository, TransferService, reject_account_id


@pytest.fixture
def engine(tmp_path) -> Iterator[Engine]:
    engine = create_engine_for_url(f"sqlite:///{tmp_path / 'test.db'}")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def repository(engine: Engine) -> AccountRepository:
    return AccountRepository(engine)


@pytest.fixture
def runner(engine: Engine) -> TransactionRunner:
    return TransactionRunner(engine)


@pytest.fixture
def service(runner: TransactionRunner, repository: AccountRepository) -> TransferService:
    return TransferService(runner, repository, reject_account_id("ex"))
