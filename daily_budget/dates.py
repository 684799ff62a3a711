from calendar import monthrange
from datetime import date, datetime, timedelta
from typing import Iterator

from daily_budget.domain import DateLike

ONE_DAY = timedelta(days=1)


def to_day(value: DateLike) -> date:
    """Strip time-of-day from a date, datetime or ISO-8601 string.

    Raises ValueError when the value cannot be read as a calendar day.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            raise ValueError(f"Invalid date: {value!r}") from None
    raise ValueError(f"Invalid date: {value!r}")


def days_between_inclusive(start: date, end: date) -> int:
    return (end - start).days + 1


def iter_days(start: date, end: date) -> Iterator[date]:
    day = start
    while day <= end:
        yield day
        if day == date.max:
            return
        day += ONE_DAY


def days_in_month(day: date) -> int:
    return monthrange(day.year, day.month)[1]


def month_bounds(day: date) -> tuple[date, date]:
    first = day.replace(day=1)
    last = day.replace(day=days_in_month(day))
    return first, last


def same_month(a: date, b: date) -> bool:
    return a.year == b.year and a.month == b.month
