from fastapi import Depends
from sqlalchemy.engine import Engine

from ..services import AccountRepository, TransferService, reject_account_id
from .config import Settings, get_settings
from .db import get_engine
from .transaction import TransactionRunner

def get_account_repository(engine: Engine = Depends(get_engine)) -> AccountRepository:
    return AccountRepository(engine)

def get_transaction_runner(engine: Engine = Depends(get_engine)) -> TransactionRunner:
    return TransactionRunner(engine)

def get_transfer_service(
    runner: TransactionRunner = Depends(get_transaction_runner),
    repository: AccountRepository = Depends(get_account_repository),
    settings: Settings = Depends(get_settings),
) -> TransferService:
    reject_transfer = None
    if settings.fault_injection_account_id is not None:
        reject_transfer = reject_account_id(settings.fault_injection_account_id)
    return TransferService(runner, repository, reject_transfer)
