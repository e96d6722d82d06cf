"""
Routes package for the Painterflow API.
Each module holds one Flask blueprint; BLUEPRINTS maps them to their URL prefixes.
"""

import logging

from routes.auth import auth_bp
from routes.customers import customers_bp
from routes.jobs import jobs_bp
from routes.calendar import calendar_bp
from routes.estimates import estimates_bp
from routes.quotes import quotes_bp
from routes.dashboard import dashboard_bp
from routes.health import health_bp

logger = logging.getLogger(__name__)

BLUEPRINTS = [
    (auth_bp, '/api/auth', 'Authentication'),
    (customers_bp, '/api/customers', 'Customers'),
    (jobs_bp, '/api/jobs', 'Jobs'),
    (calendar_bp, '/api/calendar', 'Calendar'),
    (estimates_bp, '/api/estimates', 'Estimates'),
    (quotes_bp, '/api/quotes', 'Quotes'),
    (dashboard_bp, '/api/dashboard', 'Dashboard'),
    (health_bp, '/api', 'Health Check'),
]

CRITICAL_BLUEPRINTS = ['auth', 'customers', 'jobs']


def register_blueprints(app):
    """
    Register every blueprint on the app under its prefix.

    Returns:
        list: Names of the registered blueprints
    """
    registered = []
    for blueprint, url_prefix, description in BLUEPRINTS:
        app.register_blueprint(blueprint, url_prefix=url_prefix)
        registered.append(blueprint.name)
        logger.info(f"✓ {description} blueprint registered at {url_prefix}")

    missing_critical = [name for name in CRITICAL_BLUEPRINTS if name not in registered]
    if missing_critical:
        logger.error(f"Missing essential blueprints: {', '.join(missing_critical)}")

    logger.info(f"Registered {len(registered)} blueprints")
    return registered


__all__ = [
    'auth_bp',
    'customers_bp',
    'jobs_bp',
    'calendar_bp',
    'estimates_bp',
    'quotes_bp',
    'dashboard_bp',
    'health_bp',
    'BLUEPRINTS',
    'register_blueprints',
]
