from .repository import AccountRepository
from .transfer import TransferService, reject_account_id

__all__ = ["AccountRepository", "TransferService", "reject_account_id"]
