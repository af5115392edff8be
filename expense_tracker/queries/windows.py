"""
Time window selection.

The current window is the calendar day, month or year containing the
anchor. The previous window is the "same" window one period earlier,
where the period is one calendar month for both day and month granularity
and one calendar year for year granularity. A day is therefore compared
with the same day of the previous month, not with yesterday.
"""

from typing import Union

from expense_tracker.models.expense import Granularity, TimeWindow
from expense_tracker.queries.calendar import (
    Moment,
    end_of,
    shift_months,
    shift_years,
    start_of,
)


def current_window(granularity: Union[Granularity, str], anchor: Moment) -> TimeWindow:
    """Inclusive [start, end] of the day/month/year containing `anchor`."""
    granularity = Granularity(granularity)
    return TimeWindow(
        granularity=granularity,
        start=start_of(anchor, granularity),
        end=end_of(anchor, granularity),
    )


def previous_window(granularity: Union[Granularity, str], anchor: Moment) -> TimeWindow:
    """
    The equivalent window one period back.

    The current window's start is shifted back (with end-of-month clamping)
    and the window is re-derived from that shifted anchor. Re-deriving keeps
    the previous month whole even when it is longer than the current one.
    """
    granularity = Granularity(granularity)
    start = start_of(anchor, granularity)
    if granularity == Granularity.YEAR:
        shifted = shift_years(start, -1)
    else:
        shifted = shift_months(start, -1)
    return current_window(granularity, shifted)
