"""Exception hierarchy shared by the gateway, clients and orchestrator."""
from __future__ import annotations


class AaveAptosError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(AaveAptosError, ValueError):
    """Required configuration is missing or invalid."""


class NotFoundError(AaveAptosError, LookupError):
    """A queried on-chain entity does not exist."""


class DecodingError(AaveAptosError, ValueError):
    """A remote response does not have the expected shape."""


class ViewError(AaveAptosError):
    """The node rejected a view call (abort or malformed argument)."""

    def __init__(self, function: str, message: str, status: int | None = None) -> None:
        super().__init__(f"View {function} failed: {message}")
        self.function = function
        self.message = message
        self.status = status


class SubmissionError(AaveAptosError):
    """A transaction could not be signed, broadcast or confirmed.

    ``tx_hash`` is set once the node has accepted the transaction.
    """

    def __init__(self, function: str, message: str, tx_hash: str | None = None) -> None:
        where = f"{function} ({tx_hash})" if tx_hash else function
        super().__init__(f"Submission of {where} failed: {message}")
        self.function = function
        self.message = message
        self.tx_hash = tx_hash


class ExecutionError(AaveAptosError):
    """A transaction was committed but the Move VM aborted it."""

    def __init__(self, tx_hash: str, vm_status: str) -> None:
        super().__init__(f"Transaction {tx_hash} failed: {vm_status}")
        self.tx_hash = tx_hash
        self.vm_status = vm_status
