# backend/services/date_utils.py
import re
import pytz
import logging
from datetime import datetime, date, time
from flask import current_app, has_app_context

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = 'America/Los_Angeles'

_TIME_PATTERN = re.compile(r'^(\d{1,2}):(\d{2})(?::(\d{2}))?$')


def get_business_timezone(tz_name=None):
    """
    Resolve the single timezone used for calendar bucketing and "today".

    Args:
        tz_name (str, optional): Explicit pytz zone name; defaults to the
            app's TIMEZONE setting.

    Returns:
        tzinfo: pytz timezone
    """
    if tz_name is None:
        tz_name = current_app.config.get('TIMEZONE') if has_app_context() else None
    try:
        return pytz.timezone(tz_name or DEFAULT_TIMEZONE)
    except pytz.UnknownTimeZoneError:
        logger.error(f"Unknown timezone '{tz_name}', falling back to {DEFAULT_TIMEZONE}")
        return pytz.timezone(DEFAULT_TIMEZONE)


def now_in_business_tz(tz=None):
    tz = tz or get_business_timezone()
    return datetime.now(pytz.utc).astimezone(tz)


def today_in_business_tz(tz=None):
    return now_in_business_tz(tz).date()


def to_utc_naive(dt):
    """Convert an aware datetime to the naive UTC form the database stores"""
    if dt.tzinfo is None:
        raise ValueError("Expected a timezone-aware datetime")
    return dt.astimezone(pytz.utc).replace(tzinfo=None)


def to_business_tz(dt, tz=None):
    """Interpret a stored naive UTC datetime in the business timezone"""
    tz = tz or get_business_timezone()
    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)
    return dt.astimezone(tz)


def parse_job_date(date_str):
    """
    Parse a date string for a job, returning a plain calendar date.

    Job dates carry no time of day, so an ISO timestamp is cut down to its
    date part without any timezone shift.

    Args:
        date_str (str): Date string to parse

    Returns:
        date: Parsed date, or None for an empty value

    Raises:
        ValueError: if the string is not a date
    """
    if not date_str:
        return None
    if isinstance(date_str, date) and not isinstance(date_str, datetime):
        return date_str

    date_str = str(date_str).strip()
    try:
        if 'T' in date_str:
            date_str = date_str.split('T')[0]
        return date.fromisoformat(date_str)
    except ValueError as e:
        logger.error(f"Error parsing job date '{date_str}': {str(e)}")
        raise ValueError(f"Invalid date format: {date_str}")


def parse_time_of_day(time_str):
    """
    Parse "HH:MM" (24-hour, optional seconds) into a time.

    Raises:
        ValueError: if the value is not a valid time
    """
    match = _TIME_PATTERN.match(str(time_str or '').strip())
    if not match:
        raise ValueError(f"Invalid time format: {time_str}")
    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3) or 0)
    if hour > 23 or minute > 59 or second > 59:
        raise ValueError(f"Invalid time format: {time_str}")
    return time(hour, minute, second)


def local_datetime_to_utc(day, time_of_day, tz=None):
    """
    Combine a calendar day and wall-clock time in the business timezone and
    return the naive UTC datetime to store.
    """
    tz = tz or get_business_timezone()
    local_dt = tz.localize(datetime.combine(day, time_of_day))
    return to_utc_naive(local_dt)
