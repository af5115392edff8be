"""
Abstract Storage Interface

DESIGN DECISION: The store never touches a storage backend directly.
It is handed an object implementing this interface, which allows us to:
1. Keep the local JSON file as the default slot
2. Use in-memory storage for testing
3. Keep store logic decoupled from storage implementation

The interface mirrors a single key-value slot: the whole collection is
loaded at once and overwritten wholesale on every save.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from expense_tracker.models.expense import ExpenseRecord


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for expense storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self) -> list[ExpenseRecord]:
        """
        Load the persisted collection.

        Returns:
            The stored records in stored order, or an empty list when
            nothing has been stored yet

        Raises:
            DecodeError: If the stored payload is malformed
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def save(self, records: Sequence[ExpenseRecord]) -> None:
        """
        Overwrite the persisted collection.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """
        Remove the persisted collection entirely.

        Raises:
            StorageError: If the backend cannot be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class DecodeError(StorageError):
    """Persisted data could not be decoded into expense records."""
    pass
