# backend/services/metrics.py
import math
import logging
from datetime import datetime

from services.date_utils import now_in_business_tz, to_utc_naive

logger = logging.getLogger(__name__)


def growth_percentage(current, previous):
    """
    Month-over-month change as a whole percentage.

    With no baseline (previous == 0) any activity counts as 100% and none as
    0%; this is an approximation, not a true rate.
    """
    if previous > 0:
        # halves round up, not to even
        return math.floor((current - previous) / previous * 100 + 0.5)
    return 100 if current > 0 else 0


def month_windows(now=None):
    """
    Start of the current and previous month, as naive UTC datetimes.

    Args:
        now (datetime, optional): aware datetime in the business timezone
    """
    now = now or now_in_business_tz()
    tz = now.tzinfo
    this_month = datetime(now.year, now.month, 1)
    if now.month == 1:
        prev_month = datetime(now.year - 1, 12, 1)
    else:
        prev_month = datetime(now.year, now.month - 1, 1)

    if hasattr(tz, 'localize'):
        this_start, prev_start = tz.localize(this_month), tz.localize(prev_month)
    else:
        this_start, prev_start = this_month.replace(tzinfo=tz), prev_month.replace(tzinfo=tz)
    return to_utc_naive(this_start), to_utc_naive(prev_start)


def dashboard_summary(total_customers, customers_before_month, jobs_this_month, jobs_last_month):
    """Combine the four dashboard counts into the growth figures"""
    return {
        'customers': {
            'total': total_customers,
            'previous': customers_before_month,
            'growth': growth_percentage(total_customers, customers_before_month),
        },
        'jobs': {
            'this_month': jobs_this_month,
            'last_month': jobs_last_month,
            'growth': growth_percentage(jobs_this_month, jobs_last_month),
        },
    }
