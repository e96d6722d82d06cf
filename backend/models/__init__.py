# backend/models/__init__.py

from .base import db, utcnow, isoformat_utc

# --- Model Import Order ---
# Customers first: every other table holds an optional reference to them.

# 1. Foundational Models
from .user import User
from .customer import Customer, customer_reference, customer_fields

# 2. Scheduling Models
from .job import Job, JOB_STATUSES, FINISH_OPTIONS
from .event import CalendarEvent

# 3. Pricing Models
from .estimate import Estimate, EstimateItem
from .quote import Quote, QUOTE_STATUSES

__all__ = [
    'db',
    'utcnow',
    'isoformat_utc',
    'User',
    'Customer',
    'customer_reference',
    'customer_fields',
    'Job',
    'JOB_STATUSES',
    'FINISH_OPTIONS',
    'CalendarEvent',
    'Estimate',
    'EstimateItem',
    'Quote',
    'QUOTE_STATUSES',
]
