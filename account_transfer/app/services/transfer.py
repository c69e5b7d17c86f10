from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Optional

from sqlmodel import Session

from ..core.errors import InsufficientFundsError, TransferRejectedError
from ..core.transaction import TransactionRunner
from ..models import AccountResponse, TransferRequest, TransferResponse
from .repository import AccountRepository


logger = logging.getLogger(__name__)

RejectPredicate = Callable[[str], bool]


def reject_account_id(sentinel: str) -> RejectPredicate:
    """Build a fault-injection predicate refusing transfers into ``sentinel``."""

    def _reject(account_id: str) -> bool:
        return account_id == sentinel

    return _reject


def _never_reject(account_id: str) -> bool:
    return False


class TransferService:
    def __init__(
        self,
        runner: TransactionRunner,
        repository: AccountRepository,
        reject_transfer: Optional[RejectPredicate] = None,
    ) -> None:
        self.runner = runner
        self.repository = repository
        self.reject_transfer = reject_transfer or _never_reject

    def account_transfer(self, from_id: str, to_id: str, amount: int) -> TransferResponse:
        """Move ``amount`` from ``from_id`` to ``to_id`` in one transaction.

        Any failure after the debit rolls back every write made for this call.
        """
        request = TransferRequest(from_id=from_id, to_id=to_id, amount=amount)
        if request.from_id == request.to_id:
            raise ValueError("Cannot transfer to the same account")

        def work(session: Session) -> TransferResponse:
            return self._transfer(request)

        result = self.runner.run_in_transaction(work)
        logger.info(
            "account.transfer",
            extra={
                "from_id": request.from_id,
                "to_id": request.to_id,
                "amount": request.amount,
            },
        )
        return result

    def _transfer(self, request: TransferRequest) -> TransferResponse:
        source = self.repository.find_by_id(request.from_id)
        dest = self.repository.find_by_id(request.to_id)

        if source.money < request.amount:
            raise InsufficientFundsError("Insufficient funds for transfer")

        dest_money = dest.money + request.amount
        source = self.repository.update_balance(
            request.from_id, source.money - request.amount
        )

        # Fault-injection hook: fails with the debit already written.
        if self.reject_transfer(request.to_id):
            raise TransferRejectedError(f"Transfer to account {request.to_id} rejected")

        dest = self.repository.update_balance(request.to_id, dest_money)
        return TransferResponse(
            source=AccountResponse.model_validate(source),
            dest=AccountResponse.model_validate(dest),
        )
