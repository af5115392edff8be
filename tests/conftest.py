"""Shared fixtures: in-memory storage, a controllable clock, and a store."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from expense_tracker.audit import AuditLogger
from expense_tracker.config import get_settings
from expense_tracker.models.expense import ExpenseCategory, ExpenseRecord
from expense_tracker.services.storage import InMemoryStorage
from expense_tracker.store import ExpenseStore


class FakeClock:
    """Returns a fixed time, advanced explicitly by tests."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def make_record(
    expense_id: int,
    amount: str,
    when: datetime,
    category: ExpenseCategory = ExpenseCategory.FOOD,
) -> ExpenseRecord:
    return ExpenseRecord(
        id=expense_id,
        amount=Decimal(amount),
        category=category,
        date=when,
    )


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch, tmp_path):
    """Isolate settings from the developer's environment and .env file."""
    monkeypatch.chdir(tmp_path)
    for name in ("EXPENSES_STORAGE_PATH", "EXPENSES_STORAGE_KEY", "LOG_LEVEL",
                 "DEFAULT_GRANULARITY", "AUDIT_HISTORY_SIZE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 15, 10, 0, 0))


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def audit_logger():
    return AuditLogger(history_size=50)


@pytest.fixture
def store(storage, audit_logger, clock):
    return ExpenseStore(storage, audit_logger=audit_logger, clock=clock)
