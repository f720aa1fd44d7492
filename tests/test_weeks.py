from datetime import date, datetime, timezone

from app.utils.weeks import get_week_number, week_stamp


def test_first_monday_of_2024_is_week_one():
    assert get_week_number(date(2024, 1, 1)) == 1


def test_new_years_day_2023_belongs_to_last_week_of_2022():
    assert get_week_number(date(2023, 1, 1)) == 52


def test_accepts_datetimes():
    assert get_week_number(datetime(2024, 1, 1, 23, 59, tzinfo=timezone.utc)) == 1


def test_long_year_has_week_53():
    assert get_week_number(date(2020, 12, 31)) == 53


def test_week_stamp_uses_calendar_year():
    assert week_stamp(date(2023, 1, 1)) == (52, 2023)
    assert week_stamp(date(2024, 3, 13)) == (11, 2024)
