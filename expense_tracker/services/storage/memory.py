"""
In-Memory Storage Implementation

Keeps each slot as serialized JSON text, so everything written goes
through the same encode/decode path as the file backend. Used by tests
and when the app runs without a writable file.
"""

from typing import Optional, Sequence

from expense_tracker.models.expense import ExpenseRecord
from expense_tracker.services.storage.codec import dumps_records, loads_records
from expense_tracker.services.storage.interface import ExpenseStorageInterface


class InMemoryStorage(ExpenseStorageInterface):
    """Expense storage held in a plain dict of slot -> JSON text."""

    def __init__(self, key: str = "expenses", slots: Optional[dict[str, str]] = None):
        self._key = key
        self.slots: dict[str, str] = slots if slots is not None else {}
        self.save_count = 0

    def load(self) -> list[ExpenseRecord]:
        text = self.slots.get(self._key)
        if text is None:
            return []
        return loads_records(text)

    def save(self, records: Sequence[ExpenseRecord]) -> None:
        self.slots[self._key] = dumps_records(records)
        self.save_count += 1

    def clear(self) -> None:
        self.slots.pop(self._key, None)
