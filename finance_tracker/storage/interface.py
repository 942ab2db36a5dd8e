"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the ledger logic decoupled from the file format
2. Use in-memory storage for testing
3. Swap the flat file for something else later

The interface is intentionally tiny. The ledger file is append-only, so
the only operations are "read everything" and "add one".
"""

from abc import ABC, abstractmethod
from typing import Optional

from finance_tracker.models.transaction import Transaction


class TransactionStorageInterface(ABC):
    """
    Abstract interface for transaction storage operations.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self) -> list[Transaction]:
        """
        Load every stored transaction, in stored order.

        Returns:
            All transactions; empty on first run

        Raises:
            MalformedFileError: If stored data cannot be parsed
            StorageIOError: If the backing store cannot be read
        """
        pass

    @abstractmethod
    def append(self, transaction: Transaction) -> None:
        """
        Durably append one transaction.

        Args:
            transaction: The transaction to persist

        Raises:
            StorageIOError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class MalformedFileError(StorageError):
    """A stored line could not be parsed; the whole load is aborted."""

    def __init__(
        self,
        path: str,
        line_number: int,
        line: str,
        reason: str,
    ):
        self.path = path
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"{path}:{line_number}: {reason}")


class StorageIOError(StorageError):
    """The backing file could not be created, opened, read, or written."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)
