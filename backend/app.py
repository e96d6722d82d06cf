import os
import logging
from flask import Flask, request, jsonify
from flask_login import LoginManager
from sqlalchemy import text

from config import config, get_config_name
from models import db, User
from middleware.cors import setup_cors
from routes import register_blueprints

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def configure_logging(app):
    """Route module loggers and app.logger through one handler at LOG_LEVEL"""
    level_name = str(app.config.get('LOG_LEVEL', 'INFO')).upper()
    level = logging.DEBUG if app.debug else getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)
    app.logger.setLevel(level)


def create_app(config_name=None):
    """
    Application factory.

    Args:
        config_name (str, optional): development, production or testing;
            detected from the environment when omitted.
    """
    if config_name is None:
        config_name = get_config_name()

    app = Flask(__name__)

    try:
        config_instance = config[config_name]()
        app.config.from_object(config_instance)
    except Exception as config_error:
        app.logger.error(f"❌ Configuration loading failed: {config_error}")
        raise

    configure_logging(app)
    app.logger.info(f"✓ Configuration loaded for {config_name} environment")

    db_uri = app.config.get('SQLALCHEMY_DATABASE_URI', '')
    if db_uri.startswith('sqlite:///') and ':memory:' not in db_uri:
        # SQLite needs its directory to exist before the first connect
        try:
            os.makedirs(os.path.dirname(db_uri[len('sqlite:///'):]), exist_ok=True)
        except OSError as e:
            app.logger.warning(f"Could not create database directory: {e}")

    db.init_app(app)
    setup_cors(app)

    login_manager = LoginManager()
    login_manager.init_app(app)
    login_manager.session_protection = 'basic'

    @login_manager.unauthorized_handler
    def handle_unauthorized():
        """JSON 401 instead of a redirect to a login page"""
        app.logger.warning(f"Unauthorized API access attempt to {request.path} from {request.remote_addr}")
        return jsonify({
            'error': 'Authentication required',
            'message': 'You must be logged in to access this endpoint',
            'code': 'UNAUTHORIZED'
        }), 401

    @login_manager.user_loader
    def load_user(user_id):
        try:
            return db.session.get(User, int(user_id))
        except (ValueError, TypeError) as e:
            app.logger.warning(f"Invalid user_id provided to user_loader: {user_id} - {e}")
            return None

    registered_blueprints = register_blueprints(app)

    @app.route('/')
    def index():
        return jsonify({
            'message': 'Painterflow API',
            'status': 'running',
            'version': '1.0.0',
            'environment': config_name,
            'endpoints': {
                'health': '/api/health',
                'auth': '/api/auth',
                'customers': '/api/customers',
                'jobs': '/api/jobs',
                'calendar': '/api/calendar',
                'estimates': '/api/estimates',
                'quotes': '/api/quotes',
                'dashboard': '/api/dashboard'
            },
            'blueprints': registered_blueprints
        })

    @app.errorhandler(400)
    def bad_request(error):
        return jsonify({
            'error': 'Bad Request',
            'message': getattr(error, 'description', 'The request could not be understood'),
            'code': 'BAD_REQUEST'
        }), 400

    @app.errorhandler(404)
    def not_found(error):
        if request.path.startswith('/api/'):
            return jsonify({
                'error': 'Not Found',
                'message': f'The requested resource {request.path} does not exist',
                'code': 'NOT_FOUND'
            }), 404
        return jsonify({'error': 'Not Found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({
            'error': 'Method Not Allowed',
            'message': f'The method {request.method} is not allowed for endpoint {request.path}',
            'code': 'METHOD_NOT_ALLOWED'
        }), 405

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        app.logger.error(f"Internal server error: {error}")
        return jsonify({
            'error': 'Internal Server Error',
            'message': 'An unexpected error occurred. Please try again later.',
            'code': 'INTERNAL_ERROR'
        }), 500

    with app.app_context():
        try:
            db.session.execute(text('SELECT 1'))
            db.create_all()
            app.logger.info("✓ Database tables created/verified successfully")
        except Exception as db_error:
            app.logger.error(f"❌ Database initialization error: {db_error}")
            if config_name != 'production':
                raise
            app.logger.error("Production database error - app will start but may not function properly")

    app.logger.info(f"✓ Painterflow API created ({len(registered_blueprints)} blueprints, {config_name})")
    return app


if __name__ == '__main__':
    local_app = create_app()
    port = int(os.environ.get('PORT', 5000))
    local_app.run(
        debug=local_app.config.get('DEBUG', False),
        host='0.0.0.0',
        port=port
    )
