from flask import Blueprint, jsonify, current_app
from sqlalchemy import text
from models import db
from services.date_utils import get_business_timezone
from datetime import datetime, timezone

health_bp = Blueprint('health', __name__)

APP_NAME = 'Painterflow API'


def _database_type(db_url):
    db_url = (db_url or '').lower()
    if 'sqlite' in db_url:
        return 'SQLite'
    if 'postgres' in db_url:
        return 'PostgreSQL'
    return 'Unknown'


@health_bp.route('/health', methods=['GET'])
def health_check():
    """
    Health check endpoint to verify service status
    Tests database connectivity and that the core blueprints are registered
    """
    health_status = {
        'status': 'healthy',
        'app': APP_NAME,
        'version': '1.0.0',
        'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        'checks': {}
    }
    status_code = 200

    # Database connection
    try:
        db.session.execute(text('SELECT 1'))
        db.session.commit()
        health_status['checks']['database'] = {
            'status': 'healthy',
            'type': _database_type(current_app.config.get('SQLALCHEMY_DATABASE_URI')),
            'connected': True
        }
    except Exception as db_error:
        db.session.rollback()
        current_app.logger.error(f"Database health check failed: {db_error}")
        health_status['checks']['database'] = {
            'status': 'unhealthy',
            'connected': False,
            'error': str(db_error)
        }
        health_status['status'] = 'unhealthy'
        status_code = 503

    # Application state
    registered_blueprints = list(current_app.blueprints.keys())
    missing_blueprints = [bp for bp in ['auth', 'customers', 'jobs'] if bp not in registered_blueprints]
    health_status['checks']['application'] = {
        'status': 'healthy' if not missing_blueprints else 'warning',
        'blueprints': registered_blueprints,
        'missing_critical': missing_blueprints,
        'timezone': current_app.config.get('TIMEZONE')
    }
    if missing_blueprints and status_code == 200:
        health_status['status'] = 'degraded'

    return jsonify(health_status), status_code


@health_bp.route('/health/simple', methods=['GET'])
def simple_health_check():
    """
    Simple health check for basic monitoring
    Returns minimal response for load balancers and simple monitoring
    """
    try:
        db.session.execute(text('SELECT 1'))
        db.session.commit()
        return jsonify({
            'status': 'healthy',
            'message': 'Service is running'
        }), 200
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Simple health check failed: {e}")
        return jsonify({
            'status': 'unhealthy',
            'message': 'Database connection failed'
        }), 503


@health_bp.route('/config/public', methods=['GET'])
def public_config():
    """Client-side settings that are safe to expose without signing in"""
    cfg = current_app.config
    return jsonify({
        'address_autocomplete_key': cfg.get('ADDRESS_AUTOCOMPLETE_KEY'),
        'address_autocomplete_enabled': bool(cfg.get('ADDRESS_AUTOCOMPLETE_KEY')),
        'timezone': get_business_timezone().zone,
        'default_tax_rate': cfg.get('DEFAULT_TAX_RATE', 0),
        'default_quote_valid_days': cfg.get('DEFAULT_QUOTE_VALID_DAYS', 30),
        'company_name': cfg.get('COMPANY_NAME')
    })
