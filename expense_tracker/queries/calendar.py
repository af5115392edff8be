"""
Calendar arithmetic for time windows.

All boundaries are naive local datetimes. `end_of` returns the last
microsecond of the unit, so windows built from start_of/end_of can be
compared inclusively on both ends.

Month and year shifts use dateutil's relativedelta, which clamps to the
last valid day of the target month: Mar 31 minus one month is Feb 29 (or
Feb 28), and Feb 29 minus one year is Feb 28.
"""

from datetime import date, datetime, time
from typing import Union

from dateutil.relativedelta import relativedelta

from expense_tracker.models.expense import Granularity


Moment = Union[date, datetime]


def as_datetime(moment: Moment) -> datetime:
    """Treat a bare date as its local midnight."""
    if isinstance(moment, datetime):
        return moment
    if isinstance(moment, date):
        return datetime.combine(moment, time.min)
    raise TypeError(f"Expected a date or datetime, got {type(moment).__name__}")


def start_of(moment: Moment, unit: Union[Granularity, str]) -> datetime:
    """First instant of the day, month or year containing `moment`."""
    unit = Granularity(unit)
    day_start = datetime.combine(as_datetime(moment).date(), time.min)
    if unit == Granularity.DAY:
        return day_start
    if unit == Granularity.MONTH:
        return day_start.replace(day=1)
    return day_start.replace(month=1, day=1)


def end_of(moment: Moment, unit: Union[Granularity, str]) -> datetime:
    """Last instant (23:59:59.999999) of the day, month or year containing `moment`."""
    unit = Granularity(unit)
    start = start_of(moment, unit)
    if unit == Granularity.DAY:
        last_day = start
    elif unit == Granularity.MONTH:
        # day=31 clamps to the month's last day
        last_day = start + relativedelta(day=31)
    else:
        last_day = start.replace(month=12, day=31)
    return datetime.combine(last_day.date(), time.max)


def shift_months(moment: Moment, months: int) -> datetime:
    """Shift by whole calendar months, clamping to the target month's last day."""
    return as_datetime(moment) + relativedelta(months=months)


def shift_years(moment: Moment, years: int) -> datetime:
    """Shift by whole calendar years; Feb 29 clamps to Feb 28."""
    return as_datetime(moment) + relativedelta(years=years)
