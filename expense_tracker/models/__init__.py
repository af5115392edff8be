"""
Data Models Package

This package contains all Pydantic models used in the expense tracker.
All data flowing through the system must conform to these schemas.
"""

from expense_tracker.models.expense import (
    ChartPoint,
    ExpenseCategory,
    ExpenseRecord,
    Granularity,
    PeriodSummary,
    TimeWindow,
    ValidationIssue,
    ValidationResult,
    round_amount,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "ChartPoint",
    "ExpenseCategory",
    "ExpenseRecord",
    "Granularity",
    "PeriodSummary",
    "TimeWindow",
    "ValidationIssue",
    "ValidationResult",
    "round_amount",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
