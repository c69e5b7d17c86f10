from .db import Account as AccountModel
from .schemas import (
    MAX_MONEY,
    AccountCreate,
    AccountResponse,
    TransferRequest,
    TransferResponse,
)

__all__ = [
    "AccountCreate",
    "AccountResponse",
    "TransferRequest",
    "TransferResponse",
    "AccountModel",
    "MAX_MONEY",
]
