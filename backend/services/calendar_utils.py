# backend/services/calendar_utils.py
"""
Month-view grid construction for the calendar page.

Months are zero-based (0 = January) to match the client's month picker;
weekdays are zero-based from Sunday.
"""
import calendar
import logging
from datetime import datetime, date, timedelta

from services.date_utils import get_business_timezone, to_business_tz, to_utc_naive

logger = logging.getLogger(__name__)

DAY_NAMES = ['Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat']


def _check_month(month):
    if not isinstance(month, int) or isinstance(month, bool) or not 0 <= month <= 11:
        raise ValueError(f'Month must be between 0 and 11, got {month!r}')


def days_in_month(year, month):
    # Day 0 of the next month is the last day of this one
    _check_month(month)
    if month == 11:
        first_of_next = date(year + 1, 1, 1)
    else:
        first_of_next = date(year, month + 2, 1)
    return (first_of_next - timedelta(days=1)).day


def first_weekday(year, month):
    """Weekday of the 1st, 0 = Sunday"""
    _check_month(month)
    # date.weekday(): Monday = 0
    return (date(year, month + 1, 1).weekday() + 1) % 7


def shift_month(year, month, delta):
    """Move by delta months with January/December rollover"""
    _check_month(month)
    total = year * 12 + month + delta
    return total // 12, total % 12


def month_name(month):
    _check_month(month)
    return calendar.month_name[month + 1]


def month_bounds(year, month, tz=None):
    """
    First and last second of the month in the business timezone, as naive
    UTC datetimes for querying stored timestamps.
    """
    tz = tz or get_business_timezone()
    start_local = tz.localize(datetime(year, month + 1, 1, 0, 0, 0))
    end_local = tz.localize(datetime(year, month + 1, days_in_month(year, month), 23, 59, 59))
    return to_utc_naive(start_local), to_utc_naive(end_local)


def events_on_day(events, year, month, day, tz=None):
    """
    Events whose start falls on the given local calendar day.

    Args:
        events (list): objects with a naive-UTC ``start_at``
    """
    tz = tz or get_business_timezone()
    matched = []
    for event in events:
        local_start = to_business_tz(event.start_at, tz)
        if (local_start.year, local_start.month - 1, local_start.day) == (year, month, day):
            matched.append(event)
    return matched


def format_time(dt, tz=None):
    """Short wall-clock label such as '9:00 AM'"""
    local_dt = to_business_tz(dt, tz)
    hour = local_dt.hour % 12 or 12
    suffix = 'AM' if local_dt.hour < 12 else 'PM'
    return f"{hour}:{local_dt.minute:02d} {suffix}"


def build_month_grid(year, month, events=(), today=None, tz=None, serialize=None):
    """
    Build the day grid for a month view.

    Args:
        year (int): Four digit year
        month (int): Zero-based month
        events (iterable): Calendar events with naive-UTC ``start_at``
        today (date, optional): Current day in the business timezone
        tz (tzinfo, optional): Business timezone
        serialize (callable, optional): Converts an event for output;
            defaults to the event's ``to_dict``

    Returns:
        dict: leading blank count, one cell per day and navigation targets
    """
    tz = tz or get_business_timezone()
    serialize = serialize or (lambda evt: evt.to_dict())
    events = list(events)

    leading_blanks = first_weekday(year, month)
    total_days = days_in_month(year, month)

    today_day = -1
    if today is not None and today.year == year and today.month - 1 == month:
        today_day = today.day

    days = []
    for day in range(1, total_days + 1):
        day_events = sorted(events_on_day(events, year, month, day, tz), key=lambda evt: evt.start_at)
        days.append({
            'day': day,
            'date': date(year, month + 1, day).isoformat(),
            'is_today': day == today_day,
            'events': [
                dict(serialize(evt), time_label=format_time(evt.start_at, tz))
                for evt in day_events
            ],
        })

    prev_year, prev_month = shift_month(year, month, -1)
    next_year, next_month = shift_month(year, month, 1)

    return {
        'year': year,
        'month': month,
        'month_name': month_name(month),
        'day_names': DAY_NAMES,
        'timezone': str(tz),
        'leading_blanks': leading_blanks,
        'days_in_month': total_days,
        'days': days,
        'prev': {'year': prev_year, 'month': prev_month},
        'next': {'year': next_year, 'month': next_month},
    }
