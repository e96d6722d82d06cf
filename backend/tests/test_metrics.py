from datetime import datetime

import pytz

from services.metrics import growth_percentage, month_windows, dashboard_summary


def test_growth_percentage():
    assert growth_percentage(15, 10) == 50
    assert growth_percentage(5, 10) == -50
    assert growth_percentage(10, 10) == 0


def test_growth_without_baseline():
    assert growth_percentage(3, 0) == 100
    assert growth_percentage(0, 0) == 0


def test_growth_rounds_half_up():
    # 1/8 = 12.5%
    assert growth_percentage(9, 8) == 13
    # -12.5% rounds toward positive infinity
    assert growth_percentage(7, 8) == -12


def test_month_windows_in_january():
    tz = pytz.timezone('America/Los_Angeles')
    now = tz.localize(datetime(2025, 1, 20, 12, 0))
    this_start, prev_start = month_windows(now)
    assert this_start == datetime(2025, 1, 1, 8, 0)
    assert prev_start == datetime(2024, 12, 1, 8, 0)


def test_dashboard_summary():
    summary = dashboard_summary(12, 10, 4, 0)
    assert summary['customers'] == {'total': 12, 'previous': 10, 'growth': 20}
    assert summary['jobs'] == {'this_month': 4, 'last_month': 0, 'growth': 100}
