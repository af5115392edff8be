"""
Audit Logger

DESIGN DECISION: Every store mutation and every rejected operation is
logged. This provides:
1. Traceability of each expense
2. Debugging capability
3. A recent-activity feed the UI can show

The audit logger:
- Always logs locally through structlog
- Keeps a bounded in-memory history, newest last
- Runs synchronously inside the calling operation
"""

import logging
from collections import deque
from typing import Optional

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route stdlib logging (and therefore structlog) to stderr at `level`."""
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger("expense_tracker").setLevel(level)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An in-memory history (for the activity feed)
    """

    def __init__(self, history_size: int = 200):
        """
        Initialize audit logger.

        Args:
            history_size: How many events to retain in memory.
        """
        self._history: deque[AuditEvent] = deque(maxlen=history_size)
        self._logger = structlog.get_logger("expense_tracker.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event locally and record it in the history."""
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        self._history.append(event)

    def recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """The most recent events, newest first."""
        if limit <= 0:
            return []
        return list(reversed(self._history))[:limit]

    def log_expense_created(self, expense_id: int, amount: str, category: str) -> None:
        self.log(AuditEventBuilder.expense_created(expense_id, amount, category))

    def log_expense_updated(self, expense_id: int, old_amount: str, new_amount: str) -> None:
        self.log(AuditEventBuilder.expense_updated(expense_id, old_amount, new_amount))

    def log_expense_deleted(self, expense_id: int, amount: str, category: str) -> None:
        self.log(AuditEventBuilder.expense_deleted(expense_id, amount, category))

    def log_data_reset(self, removed: int) -> None:
        self.log(AuditEventBuilder.data_reset(removed))

    def log_data_loaded(self, count: int) -> None:
        self.log(AuditEventBuilder.data_loaded(count))

    def log_validation_failed(
        self,
        operation: str,
        issues: list[dict],
        expense_id: Optional[int] = None,
    ) -> None:
        self.log(AuditEventBuilder.validation_failed(operation, issues, expense_id))

    def log_not_found(self, operation: str, expense_id: int) -> None:
        self.log(AuditEventBuilder.expense_not_found(operation, expense_id))

    def log_save_failed(self, operation: str, error_message: str) -> None:
        """Log a storage failure that happened after a mutation."""
        self.log(AuditEventBuilder.save_failed(operation, error_message))
