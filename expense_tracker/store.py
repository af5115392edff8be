"""
Expense Record Store

The store owns the in-memory collection of expenses and is the only thing
allowed to change it. Every successful mutation is followed by a
synchronous save through the injected storage backend.

GUARANTEES:
- A rejected operation (ValidationError, NotFoundError) leaves the
  collection exactly as it was
- Ids are unique and increase with creation time
- Only the amount of an existing record ever changes

If the backend fails while saving, the in-memory change is kept, the
failure is audited, and the StorageError is re-raised to the caller.
"""

from datetime import datetime
from typing import Any, Callable, Iterator, Optional

import structlog

from expense_tracker.audit import AuditLogger
from expense_tracker.config import get_settings
from expense_tracker.models.expense import ExpenseRecord, ValidationResult
from expense_tracker.services.storage import (
    DecodeError,
    ExpenseStorageInterface,
    InMemoryStorage,
    JsonFileStorage,
    StorageError,
)
from expense_tracker.validation import ExpenseValidator


logger = structlog.get_logger(__name__)


class ExpenseStoreError(Exception):
    """Base exception for store operations."""
    pass


class ValidationError(ExpenseStoreError):
    """Amount or category input was rejected."""

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.summary() or "Invalid expense input")

    @property
    def issues(self):
        return self.result.issues


class NotFoundError(ExpenseStoreError):
    """No expense with the requested id."""

    def __init__(self, expense_id: int):
        self.expense_id = expense_id
        super().__init__(f"Expense not found: {expense_id}")


class ExpenseStore:
    """
    Ordered collection of expense records, newest first.

    The collection is loaded from `storage` on construction; a DecodeError
    from a malformed slot propagates and no store is created.
    """

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        validator: Optional[ExpenseValidator] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._storage = storage
        self._audit_logger = audit_logger
        self._validator = validator or ExpenseValidator()
        self._clock = clock

        self._records: list[ExpenseRecord] = list(storage.load())
        self._last_id = max((record.id for record in self._records), default=0)

        if self._audit_logger:
            self._audit_logger.log_data_loaded(len(self._records))

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def records(self) -> tuple[ExpenseRecord, ...]:
        """Snapshot of the collection in store order."""
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ExpenseRecord]:
        return iter(tuple(self._records))

    def __contains__(self, expense_id: object) -> bool:
        return any(record.id == expense_id for record in self._records)

    def get(self, expense_id: int) -> ExpenseRecord:
        """Return the record with `expense_id` or raise NotFoundError."""
        return self._records[self._index_of(expense_id, "get")]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, amount: Any, category: Any) -> ExpenseRecord:
        """
        Record a new expense dated now and put it first.

        Raises:
            ValidationError: amount is not a positive number or the
                category is not one of ExpenseCategory
        """
        result = self._validator.validate_new(amount, category)
        if not result.is_valid:
            self._reject("create", result)

        now = self._clock()
        record = ExpenseRecord(
            id=self._next_id(now),
            amount=result.amount,
            category=result.category,
            date=now,
        )
        self._records.insert(0, record)
        self._last_id = record.id

        if self._audit_logger:
            self._audit_logger.log_expense_created(
                record.id, str(record.amount), record.category.value
            )
        self._persist("create")
        return record

    def update_amount(self, expense_id: int, new_amount: Any) -> ExpenseRecord:
        """
        Replace the amount of an existing expense.

        Raises:
            NotFoundError: no expense with `expense_id`
            ValidationError: `new_amount` is not a positive number
        """
        index = self._index_of(expense_id, "update_amount")

        result = self._validator.validate_amount(new_amount)
        if not result.is_valid:
            self._reject("update_amount", result, expense_id)

        old = self._records[index]
        updated = old.with_amount(result.amount)
        self._records[index] = updated

        if self._audit_logger:
            self._audit_logger.log_expense_updated(
                expense_id, str(old.amount), str(updated.amount)
            )
        self._persist("update_amount")
        return updated

    def delete(self, expense_id: int) -> None:
        """
        Remove an expense.

        Raises:
            NotFoundError: no expense with `expense_id`, including one that
                was already deleted
        """
        index = self._index_of(expense_id, "delete")
        removed = self._records.pop(index)

        if self._audit_logger:
            self._audit_logger.log_expense_deleted(
                removed.id, str(removed.amount), removed.category.value
            )
        self._persist("delete")

    def reset_all(self) -> None:
        """Drop every expense and the persisted slot."""
        removed = len(self._records)
        self._records.clear()

        if self._audit_logger:
            self._audit_logger.log_data_reset(removed)
        try:
            self._storage.clear()
        except StorageError as e:
            self._save_failed("reset_all", e)
            raise

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _next_id(self, now: datetime) -> int:
        """Millisecond timestamp, bumped past the last id on collisions."""
        candidate = int(now.timestamp() * 1000)
        return max(candidate, self._last_id + 1)

    def _index_of(self, expense_id: int, operation: str) -> int:
        for index, record in enumerate(self._records):
            if record.id == expense_id:
                return index

        if self._audit_logger:
            self._audit_logger.log_not_found(operation, expense_id)
        raise NotFoundError(expense_id)

    def _reject(
        self,
        operation: str,
        result: ValidationResult,
        expense_id: Optional[int] = None,
    ) -> None:
        if self._audit_logger:
            self._audit_logger.log_validation_failed(
                operation,
                [issue.model_dump() for issue in result.issues],
                expense_id,
            )
        raise ValidationError(result)

    def _persist(self, operation: str) -> None:
        try:
            self._storage.save(self._records)
        except StorageError as e:
            self._save_failed(operation, e)
            raise

    def _save_failed(self, operation: str, error: StorageError) -> None:
        if self._audit_logger:
            self._audit_logger.log_save_failed(operation, str(error))


def create_store(use_file_storage: bool = True) -> tuple[ExpenseStore, AuditLogger]:
    """
    Factory function to create the store the way the app runs it.

    Args:
        use_file_storage: Whether to persist to the configured JSON file.
                          Set to False to keep everything in memory.

    Returns:
        (store, audit_logger)

    A backend that cannot be read falls back to in-memory storage.
    A DecodeError is not caught: overwriting a corrupt slot would lose data.
    """
    settings = get_settings()
    audit_logger = AuditLogger(history_size=settings.app.audit_history_size)

    if use_file_storage:
        try:
            return ExpenseStore(JsonFileStorage(), audit_logger=audit_logger), audit_logger
        except DecodeError:
            raise
        except StorageError as e:
            logger.warning("file_storage_unavailable", error=str(e))

    storage = InMemoryStorage(key=settings.storage.key)
    return ExpenseStore(storage, audit_logger=audit_logger), audit_logger
