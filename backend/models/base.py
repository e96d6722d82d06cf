# backend/models/base.py

from datetime import datetime, timezone
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def utcnow():
    """Naive UTC timestamp; every DateTime column in this app is stored as UTC"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat_utc(value):
    """Serialize a stored UTC timestamp with an explicit offset"""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()
