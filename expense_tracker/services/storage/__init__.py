"""
Storage Services Package

Provides the abstract storage interface and its implementations.
The JSON file backend is the default; the in-memory one is for tests.
"""

from expense_tracker.services.storage.interface import (
    DecodeError,
    ExpenseStorageInterface,
    StorageError,
)
from expense_tracker.services.storage.codec import (
    decode_records,
    dumps_records,
    encode_records,
    loads_records,
)
from expense_tracker.services.storage.json_file import JsonFileStorage
from expense_tracker.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "ExpenseStorageInterface",
    # Exceptions
    "DecodeError",
    "StorageError",
    # Codec
    "decode_records",
    "dumps_records",
    "encode_records",
    "loads_records",
    # Implementations
    "InMemoryStorage",
    "JsonFileStorage",
]
