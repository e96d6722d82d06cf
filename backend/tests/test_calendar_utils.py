from datetime import date, datetime
from types import SimpleNamespace

import pytz
import pytest

from services.calendar_utils import (
    days_in_month, first_weekday, shift_month, month_name, month_bounds,
    events_on_day, format_time, build_month_grid
)

LA = pytz.timezone('America/Los_Angeles')


def test_january_2025_layout():
    assert first_weekday(2025, 0) == 3
    assert days_in_month(2025, 0) == 31


def test_february_leap_years():
    assert days_in_month(2024, 1) == 29
    assert days_in_month(2025, 1) == 28
    assert days_in_month(1900, 1) == 28
    assert days_in_month(2000, 1) == 29


def test_shift_month_rolls_over_year():
    assert shift_month(2025, 0, -1) == (2024, 11)
    assert shift_month(2024, 11, 1) == (2025, 0)
    assert shift_month(2025, 5, 0) == (2025, 5)


def test_month_out_of_range():
    with pytest.raises(ValueError):
        month_name(12)


def test_month_bounds_are_utc():
    start, end = month_bounds(2025, 0, LA)
    assert start == datetime(2025, 1, 1, 8, 0, 0)
    assert end == datetime(2025, 2, 1, 7, 59, 59)


def test_event_late_evening_stays_on_local_day():
    # 2025-01-10 23:30 in Los Angeles is the 11th in UTC
    event = SimpleNamespace(start_at=datetime(2025, 1, 11, 7, 30))
    assert events_on_day([event], 2025, 0, 10, LA) == [event]
    assert events_on_day([event], 2025, 0, 11, LA) == []


def test_format_time():
    assert format_time(datetime(2025, 1, 10, 17, 0), LA) == '9:00 AM'
    assert format_time(datetime(2025, 1, 10, 20, 5), LA) == '12:05 PM'


def test_build_month_grid():
    event = SimpleNamespace(start_at=datetime(2025, 1, 10, 17, 0))
    grid = build_month_grid(
        2025, 0, [event], today=date(2025, 1, 10), tz=LA,
        serialize=lambda evt: {'title': 'Walkthrough'}
    )
    assert grid['leading_blanks'] == 3
    assert grid['days_in_month'] == 31
    assert len(grid['days']) == 31
    assert grid['month_name'] == 'January'
    assert grid['prev'] == {'year': 2024, 'month': 11}
    assert grid['next'] == {'year': 2025, 'month': 1}

    tenth = grid['days'][9]
    assert tenth['is_today']
    assert tenth['events'] == [{'title': 'Walkthrough', 'time_label': '9:00 AM'}]
    assert sum(1 for day in grid['days'] if day['is_today']) == 1


def test_build_month_grid_other_month_has_no_today():
    grid = build_month_grid(2025, 1, [], today=date(2025, 1, 10), tz=LA)
    assert not any(day['is_today'] for day in grid['days'])
