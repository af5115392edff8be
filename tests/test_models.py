"""
Tests for the Expense Tracker models

Test strategy:
1. Unit tests for individual components (models, validators, queries)
2. Store tests against in-memory storage
3. No real files outside pytest's tmp_path
"""

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal

from expense_tracker.models.expense import (
    ChartPoint,
    ExpenseCategory,
    ExpenseRecord,
    Granularity,
    PeriodSummary,
    TimeWindow,
    ValidationIssue,
    ValidationResult,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestExpenseRecord:
    """Tests for the ExpenseRecord model."""

    def test_record_creation(self):
        """Test ExpenseRecord model creation."""
        record = ExpenseRecord(
            id=1710496800000,
            amount=Decimal("12.50"),
            category=ExpenseCategory.FOOD,
            date=datetime(2024, 3, 15, 10, 0),
        )
        assert record.amount == Decimal("12.50")
        assert record.category == ExpenseCategory.FOOD
        assert record.date_key == "2024-03-15"

    def test_date_key_zero_padded_year(self):
        """Years before 1000 still give a YYYY-MM-DD key."""
        record = ExpenseRecord(
            id=1,
            amount=Decimal("1"),
            category="Food",
            date=datetime(999, 1, 1, 8, 30),
        )
        assert record.date_key == "0999-01-01"

    def test_amount_rounded_to_cents(self):
        """Test that amounts are rounded half-up to two places."""
        record = ExpenseRecord(id=1, amount=Decimal("10.005"), category="Food")
        assert record.amount == Decimal("10.01")

    def test_rejects_zero_and_negative_amounts(self):
        """Test that non-positive amounts are rejected."""
        for amount in ("0", "-5", "0.004"):
            with pytest.raises(ValueError):
                ExpenseRecord(id=1, amount=Decimal(amount), category="Food")

    def test_rejects_unknown_category(self):
        """Test that categories outside the enumeration are rejected."""
        with pytest.raises(ValueError):
            ExpenseRecord(id=1, amount=Decimal("1"), category="Groceries")

    def test_record_is_frozen(self):
        """Test that records cannot be mutated in place."""
        record = ExpenseRecord(id=1, amount=Decimal("1"), category="Food")
        with pytest.raises(ValueError):
            record.amount = Decimal("2")

    def test_with_amount_keeps_identity(self):
        """Test that with_amount only changes the amount."""
        record = ExpenseRecord(
            id=7,
            amount=Decimal("1"),
            category="Airtime",
            date=datetime(2024, 1, 2, 3, 4, 5),
        )
        updated = record.with_amount(Decimal("9.99"))
        assert updated.amount == Decimal("9.99")
        assert (updated.id, updated.category, updated.date) == (
            record.id, record.category, record.date,
        )

    def test_utc_date_converted_to_local(self):
        """Test that offset-aware dates become naive local time."""
        aware = datetime(2024, 3, 15, 8, 0, tzinfo=timezone.utc)
        record = ExpenseRecord(id=1, amount=Decimal("1"), category="Food", date=aware)
        assert record.date.tzinfo is None
        assert record.date == aware.astimezone().replace(tzinfo=None)

    def test_to_storage_dict(self):
        """Test conversion to the persisted shape."""
        record = ExpenseRecord(
            id=5,
            amount=Decimal("3.20"),
            category=ExpenseCategory.SHOPPING,
            date=datetime(2024, 3, 15, 10, 0),
        )
        assert record.to_storage_dict() == {
            "id": 5,
            "amount": 3.2,
            "category": "Shopping",
            "date": "2024-03-15T10:00:00",
        }


class TestWindowAndChartModels:
    """Tests for TimeWindow, ChartPoint and PeriodSummary."""

    def test_window_contains_is_inclusive(self):
        window = TimeWindow(
            granularity=Granularity.DAY,
            start=datetime(2024, 3, 15),
            end=datetime(2024, 3, 15, 23, 59, 59, 999999),
        )
        assert window.contains(datetime(2024, 3, 15))
        assert window.contains(datetime(2024, 3, 15, 23, 59, 59, 999999))
        assert not window.contains(datetime(2024, 3, 16))

    def test_chart_point_defaults_and_row(self):
        point = ChartPoint(date_key="2024-03-15", current=Decimal("10"))
        assert point.previous == Decimal("0")
        assert point.to_chart_row() == {"date": "2024-03-15", "current": 10.0, "previous": 0.0}

    def test_chart_point_rejects_bad_key(self):
        with pytest.raises(ValueError):
            ChartPoint(date_key="15/03/2024")

    def test_summary_change(self):
        window = TimeWindow(
            granularity=Granularity.MONTH,
            start=datetime(2024, 3, 1),
            end=datetime(2024, 3, 31, 23, 59, 59, 999999),
        )
        summary = PeriodSummary(
            granularity=Granularity.MONTH,
            anchor=date(2024, 3, 15),
            current_window=window,
            previous_window=window,
            total=Decimal("15.00"),
            previous_total=Decimal("10.00"),
        )
        assert summary.change == Decimal("5.00")
        assert summary.change_ratio == pytest.approx(0.5)

    def test_summary_change_ratio_without_previous(self):
        window = TimeWindow(
            granularity=Granularity.DAY,
            start=datetime(2024, 3, 15),
            end=datetime(2024, 3, 15, 23, 59, 59),
        )
        summary = PeriodSummary(
            granularity=Granularity.DAY,
            anchor=date(2024, 3, 15),
            current_window=window,
            previous_window=window,
            total=Decimal("15.00"),
        )
        assert summary.change_ratio is None


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="not_positive",
                    message="Amount must be greater than 0",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1
        assert result.summary() == "Amount must be greater than 0"

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="large",
                    message="Large amount",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.error_count == 0


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.EXPENSE_CREATED,
            description="Expense created",
        )
        assert event.event_type == AuditEventType.EXPENSE_CREATED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.expense_created(42, "10.00", "Food")
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "expense_created"
        assert log_dict["expense_id"] == 42
        assert log_dict["details"]["category"] == "Food"

    def test_builder_severities(self):
        """Test that failures carry elevated severities."""
        assert AuditEventBuilder.data_reset(3).severity == AuditSeverity.WARNING
        assert AuditEventBuilder.expense_not_found("delete", 1).severity == AuditSeverity.WARNING
        assert AuditEventBuilder.save_failed("create", "disk full").severity == AuditSeverity.ERROR
        assert AuditEventBuilder.data_loaded(0).severity == AuditSeverity.DEBUG


class TestCategories:
    """Tests for the category and granularity enums."""

    def test_all_categories_exist(self):
        """Test that expected categories exist."""
        expected = [
            "Food", "Drugs", "Airtime", "Transportation",
            "Entertainment", "Utilities", "Shopping", "Others",
        ]
        assert [c.value for c in ExpenseCategory] == expected

    def test_granularity_values(self):
        assert [g.value for g in Granularity] == ["day", "month", "year"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
