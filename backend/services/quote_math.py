# backend/services/quote_math.py
import math
import logging
from datetime import timedelta

from services.estimate_math import parse_amount

logger = logging.getLogger(__name__)

MAX_TAX_RATE = 100
MIN_VALID_DAYS = 1
MAX_VALID_DAYS = 3650


def quote_totals(subtotal, tax_rate):
    """
    Derive the stored money fields of a quote.

    Args:
        subtotal (float): The source estimate's total
        tax_rate (float): Percentage, e.g. 8 for 8%; 0 to 100

    Returns:
        dict: subtotal, tax_rate, tax_amount, total
    """
    subtotal = parse_amount(subtotal)
    tax_rate = parse_amount(tax_rate)
    if subtotal < 0:
        raise ValueError('Subtotal cannot be negative')
    if tax_rate < 0 or tax_rate > MAX_TAX_RATE:
        raise ValueError(f'Tax rate must be between 0 and {MAX_TAX_RATE}')

    tax_amount = subtotal * (tax_rate / 100)
    total = subtotal + tax_amount
    if not math.isfinite(total):
        raise ValueError('Quote total is too large')
    return {
        'subtotal': subtotal,
        'tax_rate': tax_rate,
        'tax_amount': tax_amount,
        'total': total,
    }


def parse_valid_days(value, default=30):
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        raise ValueError('valid_days must be a whole number of days')
    try:
        valid_days = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValueError('valid_days must be a whole number of days')
    if not MIN_VALID_DAYS <= valid_days <= MAX_VALID_DAYS:
        raise ValueError(f'valid_days must be between {MIN_VALID_DAYS} and {MAX_VALID_DAYS}')
    return valid_days


def valid_until(today, valid_days):
    """The last day a quote may be accepted"""
    try:
        return today + timedelta(days=valid_days)
    except OverflowError:
        raise ValueError('valid_days is out of range')
