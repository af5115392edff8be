"""
Services Package

External-facing services used by the expense tracker.
"""

from expense_tracker.services.storage import (
    DecodeError,
    ExpenseStorageInterface,
    InMemoryStorage,
    JsonFileStorage,
    StorageError,
)

__all__ = [
    "DecodeError",
    "ExpenseStorageInterface",
    "InMemoryStorage",
    "JsonFileStorage",
    "StorageError",
]
