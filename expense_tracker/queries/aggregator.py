"""
Window filtering and aggregation.

DESIGN DECISION: These are pure functions over record sequences. They
never touch the store or storage; the presentation layer passes in a
snapshot and renders what comes back.
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Sequence, Union

from expense_tracker.models.expense import (
    ChartPoint,
    ExpenseRecord,
    Granularity,
    PeriodSummary,
    round_amount,
)
from expense_tracker.queries.calendar import Moment, as_datetime
from expense_tracker.queries.windows import current_window, previous_window


def filter_by_window(
    records: Iterable[ExpenseRecord],
    start: datetime,
    end: datetime,
) -> list[ExpenseRecord]:
    """Records with start <= date <= end, in their original order."""
    return [record for record in records if start <= record.date <= end]


def total(records: Iterable[ExpenseRecord]) -> Decimal:
    """Sum of amounts rounded to cents; 0.00 for no records."""
    return round_amount(sum((record.amount for record in records), Decimal("0")))


def _sum_by_day(records: Iterable[ExpenseRecord]) -> dict[str, Decimal]:
    sums: dict[str, Decimal] = {}
    for record in records:
        key = record.date_key
        sums[key] = sums.get(key, Decimal("0")) + record.amount
    return sums


def bucket_series(
    current_records: Iterable[ExpenseRecord],
    previous_records: Iterable[ExpenseRecord],
) -> list[ChartPoint]:
    """
    Pair per-day sums of the current and previous periods.

    Keys appear in first-occurrence order: every current-period day first,
    then previous-period days not already present. The result is not
    sorted by date, so disjoint periods chart current days before
    previous ones.
    """
    points: dict[str, ChartPoint] = {}

    for key, amount in _sum_by_day(current_records).items():
        points[key] = ChartPoint(date_key=key, current=amount)

    for key, amount in _sum_by_day(previous_records).items():
        if key in points:
            points[key].previous = amount
        else:
            points[key] = ChartPoint(date_key=key, previous=amount)

    return list(points.values())


def summarize(
    records: Sequence[ExpenseRecord],
    granularity: Union[Granularity, str],
    anchor: Moment,
) -> PeriodSummary:
    """Filter, total and bucket `records` for one (granularity, anchor)."""
    granularity = Granularity(granularity)
    window = current_window(granularity, anchor)
    prior = previous_window(granularity, anchor)

    current_records = filter_by_window(records, window.start, window.end)
    previous_records = filter_by_window(records, prior.start, prior.end)

    return PeriodSummary(
        granularity=granularity,
        anchor=as_datetime(anchor).date(),
        current_window=window,
        previous_window=prior,
        records=current_records,
        total=total(current_records),
        previous_total=total(previous_records),
        series=bucket_series(current_records, previous_records),
    )
