from datetime import date

import pytest

from services.quote_math import quote_totals, parse_valid_days, valid_until


def test_quote_totals_with_tax():
    totals = quote_totals(110, 8)
    assert totals['subtotal'] == pytest.approx(110.0)
    assert totals['tax_amount'] == pytest.approx(8.8)
    assert totals['total'] == pytest.approx(118.8)


def test_quote_totals_without_tax():
    totals = quote_totals(250, 0)
    assert totals['tax_amount'] == 0
    assert totals['total'] == pytest.approx(250.0)


def test_negative_tax_rate_is_rejected():
    with pytest.raises(ValueError):
        quote_totals(100, -1)


def test_parse_valid_days():
    assert parse_valid_days(None) == 30
    assert parse_valid_days('', default=14) == 14
    assert parse_valid_days('45') == 45
    with pytest.raises(ValueError):
        parse_valid_days('soon')
    with pytest.raises(ValueError):
        parse_valid_days(-3)


def test_valid_until_crosses_month_end():
    assert valid_until(date(2025, 1, 15), 30) == date(2025, 2, 14)


def test_tax_rate_above_one_hundred_is_rejected():
    assert quote_totals(100, 100)['total'] == pytest.approx(200.0)
    with pytest.raises(ValueError):
        quote_totals(100, 250)


def test_valid_days_bounds():
    assert parse_valid_days(1) == 1
    assert parse_valid_days(3650) == 3650
    with pytest.raises(ValueError):
        parse_valid_days(0)
    with pytest.raises(ValueError):
        parse_valid_days(5000000)


def test_valid_until_overflow_is_a_value_error():
    with pytest.raises(ValueError):
        valid_until(date(9999, 12, 1), 60)
