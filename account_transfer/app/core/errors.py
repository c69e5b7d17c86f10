class AccountNotFoundError(Exception):
    """Raised when an account id is missing from the store."""

class DuplicateAccountError(Exception):
    """Raised when saving an account id that already exists."""

class InsufficientFundsError(Exception):
    """Raised when a transfer would drop the source balance below zero."""

class TransferRejectedError(Exception):
    """Raised when a transfer is refused after work has started."""

class StorageError(Exception):
    """Raised when the underlying database fails."""
