"""
Core Data Models for the Expense Tracker

These models define the schemas for all data flowing through the tracker:
expense records, time windows, and the aggregated chart/summary views.

DESIGN DECISION: Amounts are Decimal, rounded to two places when a record
is built. Sums are then exact and `total()` never drifts the way float
accumulation does.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


CENTS = Decimal("0.01")


def round_amount(value: Decimal) -> Decimal:
    """Round an amount half-up to two decimal places."""
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Supported expense categories.

    The values are the display labels and are what gets persisted.
    """
    FOOD = "Food"
    DRUGS = "Drugs"
    AIRTIME = "Airtime"
    TRANSPORTATION = "Transportation"
    ENTERTAINMENT = "Entertainment"
    UTILITIES = "Utilities"
    SHOPPING = "Shopping"
    OTHERS = "Others"


class Granularity(str, Enum):
    """Span of a time window."""
    DAY = "day"
    MONTH = "month"
    YEAR = "year"


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class ExpenseRecord(BaseModel):
    """
    A single recorded expense.

    Records are frozen. Editing an amount produces a replacement record
    with the same id, category and date (see `with_amount`).
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(
        ...,
        ge=0,
        description="Creation timestamp in milliseconds, unique per store"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount spent, two decimal places"
    )
    category: ExpenseCategory = Field(
        ...,
        description="Expense category"
    )
    date: datetime = Field(
        default_factory=datetime.now,
        description="When the expense occurred (naive local time)"
    )

    @field_validator('amount')
    @classmethod
    def round_to_cents(cls, v: Decimal) -> Decimal:
        """Round to cents; an amount that rounds to zero is rejected."""
        if not v.is_finite():
            raise ValueError("Amount must be a finite number")
        rounded = round_amount(v)
        if rounded <= 0:
            raise ValueError("Amount must be greater than 0")
        return rounded

    @field_validator('date')
    @classmethod
    def to_local_time(cls, v: datetime) -> datetime:
        """Offset-aware timestamps (e.g. '...Z') become naive local time."""
        if v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v

    @property
    def date_key(self) -> str:
        """Calendar-day bucket key, YYYY-MM-DD in local time."""
        return self.date.date().isoformat()

    def with_amount(self, amount: Decimal) -> "ExpenseRecord":
        """Return a copy with a new (validated) amount."""
        return ExpenseRecord(
            id=self.id,
            amount=amount,
            category=self.category,
            date=self.date,
        )

    def to_storage_dict(self) -> dict:
        """
        Convert to the persisted JSON shape.

        Returns keys: id, amount (number), category (label), date (ISO-8601).
        """
        return {
            "id": self.id,
            "amount": float(self.amount),
            "category": self.category.value,
            "date": self.date.isoformat(),
        }


# =============================================================================
# WINDOW AND AGGREGATE MODELS
# =============================================================================

class TimeWindow(BaseModel):
    """An inclusive [start, end] range of instants."""
    model_config = ConfigDict(frozen=True)

    granularity: Granularity
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


class ChartPoint(BaseModel):
    """One calendar-day bucket pairing current and previous period sums."""

    date_key: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}-\d{2}$",
        description="Calendar day, YYYY-MM-DD"
    )
    current: Decimal = Field(default=Decimal("0"))
    previous: Decimal = Field(default=Decimal("0"))

    def to_chart_row(self) -> dict:
        """Plain row for chart libraries."""
        return {
            "date": self.date_key,
            "current": float(self.current),
            "previous": float(self.previous),
        }


class PeriodSummary(BaseModel):
    """
    Everything the presentation layer renders for one (granularity, anchor).

    `records` are the current-window records in store order.
    """

    granularity: Granularity
    anchor: date
    current_window: TimeWindow
    previous_window: TimeWindow
    records: list[ExpenseRecord] = Field(default_factory=list)
    total: Decimal = Field(default=Decimal("0.00"))
    previous_total: Decimal = Field(default=Decimal("0.00"))
    series: list[ChartPoint] = Field(default_factory=list)

    @property
    def change(self) -> Decimal:
        """Current total minus previous total."""
        return self.total - self.previous_total

    @property
    def change_ratio(self) -> Optional[float]:
        """Relative change against the previous period, None if it was empty."""
        if self.previous_total == 0:
            return None
        return float(self.change / self.previous_total)


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'not_positive', 'unknown_category')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of validating expense input.

    `amount` and `category` hold the normalized values when they passed.
    """

    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)
    amount: Optional[Decimal] = None
    category: Optional[ExpenseCategory] = None

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    def summary(self) -> str:
        """All error messages joined for display."""
        return "; ".join(
            issue.message for issue in self.issues if issue.severity == "error"
        )
