# backend/routes/common.py
"""Request parsing shared by the entity blueprints."""
import re
from flask import request, jsonify
from models import db, Customer

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


class NotFoundError(ValueError):
    """A referenced row does not exist"""


def get_json_body():
    """The request's JSON object; raises ValueError when absent or malformed"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError('Request body must be a JSON object')
    return data


def optional_text(value):
    """Blank form input is stored as NULL"""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def validate_email(email):
    if email and not EMAIL_PATTERN.match(email):
        raise ValueError('Please enter a valid email address')
    return email


def resolve_customer_id(value, required=False):
    """
    Check that a submitted customer reference names an existing customer.

    Returns the integer id, or None when no customer was chosen.
    """
    if value in (None, ''):
        if required:
            raise ValueError('Customer is required')
        return None
    try:
        customer_id = int(value)
    except (TypeError, ValueError):
        raise ValueError('customer_id must be an integer')
    if db.session.get(Customer, customer_id) is None:
        raise NotFoundError('Customer not found')
    return customer_id


def error_response(error, default_status=400):
    status = 404 if isinstance(error, NotFoundError) else default_status
    return jsonify({'error': str(error)}), status
