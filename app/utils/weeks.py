"""ISO-8601 week helpers used to group weekly tasks."""

from datetime import date, datetime
from typing import Tuple, Union


def get_week_number(value: Union[date, datetime]) -> int:
    """Return the ISO-8601 week number (1-53).

    Week 1 is the week containing the year's first Thursday, so
    2024-01-01 is week 1 and 2023-01-01 is week 52 of 2022.
    """
    if isinstance(value, datetime):
        value = value.date()
    return value.isocalendar()[1]


def week_stamp(value: Union[date, datetime]) -> Tuple[int, int]:
    """Return ``(week_number, year)`` for stamping a task.

    The year is the calendar year, not the ISO year, so the first days of
    January can carry the last week number of the previous ISO year.
    """
    return get_week_number(value), value.year
