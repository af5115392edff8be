"""Time windows and aggregation over expense records."""

from expense_tracker.queries.aggregator import (
    bucket_series,
    filter_by_window,
    summarize,
    total,
)
from expense_tracker.queries.calendar import end_of, shift_months, shift_years, start_of
from expense_tracker.queries.windows import current_window, previous_window

__all__ = [
    "bucket_series",
    "current_window",
    "end_of",
    "filter_by_window",
    "previous_window",
    "shift_months",
    "shift_years",
    "start_of",
    "summarize",
    "total",
]
