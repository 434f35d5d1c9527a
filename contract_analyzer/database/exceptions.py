class StoreError(Exception):
    """Base exception for contract store failures."""


class StoreWriteError(StoreError):
    """Raised when a write to the contract store fails."""


class StatusTransitionError(StoreError):
    """Raised when a status change would move a record backwards."""


class StoreReadError(StoreError):
    """Raised when a read from the contract store fails."""
