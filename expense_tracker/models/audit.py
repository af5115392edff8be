"""
Audit Models for the Expense Tracker

Every store mutation and every rejected operation produces an audit event.
This provides:
1. Traceability of what happened to each expense
2. Debugging information when things go wrong
3. A recent-activity feed for the UI

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Mutations
    EXPENSE_CREATED = "expense_created"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"
    DATA_RESET = "data_reset"

    # Loading
    DATA_LOADED = "data_loaded"

    # Rejections and failures
    VALIDATION_FAILED = "validation_failed"
    EXPENSE_NOT_FOUND = "expense_not_found"
    SAVE_FAILED = "save_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Which expense is this about?
    expense_id: Optional[int] = Field(
        default=None,
        description="ID of the expense this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "expense_id": self.expense_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_created(expense_id, amount, category)
        event = AuditEventBuilder.data_reset(removed=12)
    """

    @staticmethod
    def expense_created(expense_id: int, amount: str, category: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_CREATED,
            expense_id=expense_id,
            description=f"Expense created: {category} {amount}",
            details={
                "amount": amount,
                "category": category,
            },
        )

    @staticmethod
    def expense_updated(
        expense_id: int,
        old_amount: str,
        new_amount: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            expense_id=expense_id,
            description=f"Expense amount changed from {old_amount} to {new_amount}",
            details={
                "old_amount": old_amount,
                "new_amount": new_amount,
            },
        )

    @staticmethod
    def expense_deleted(expense_id: int, amount: str, category: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            expense_id=expense_id,
            description=f"Expense deleted: {category} {amount}",
            details={
                "amount": amount,
                "category": category,
            },
        )

    @staticmethod
    def data_reset(removed: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_RESET,
            severity=AuditSeverity.WARNING,
            description=f"All data reset ({removed} expenses removed)",
            details={"removed": removed},
        )

    @staticmethod
    def data_loaded(count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATA_LOADED,
            severity=AuditSeverity.DEBUG,
            description=f"Loaded {count} expenses from storage",
            details={"count": count},
        )

    @staticmethod
    def validation_failed(
        operation: str,
        issues: list[dict],
        expense_id: Optional[int] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            expense_id=expense_id,
            description=f"Validation failed during {operation}",
            details={
                "operation": operation,
                "issues": issues,
            },
        )

    @staticmethod
    def expense_not_found(operation: str, expense_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            expense_id=expense_id,
            description=f"{operation} targeted unknown expense {expense_id}",
            details={"operation": operation},
        )

    @staticmethod
    def save_failed(operation: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            description=f"Persisting after {operation} failed",
            details={"operation": operation},
            error_message=error_message,
        )
