import os
from datetime import timedelta
from dotenv import load_dotenv

basedir = os.path.abspath(os.path.dirname(__file__))
load_dotenv(os.path.join(basedir, '.env'))


def _env_flag(name, default='False'):
    return os.environ.get(name, default).lower() in ('true', '1', 't', 'yes')


def _normalize_database_url(database_url):
    """SQLAlchemy only accepts the postgresql:// scheme"""
    if database_url and database_url.startswith('postgres://'):
        return database_url.replace('postgres://', 'postgresql://', 1)
    return database_url


class Config:
    """Base configuration shared by every environment"""

    # Security Configuration
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    @staticmethod
    def get_database_url():
        """Get properly formatted database URL string"""
        database_url = os.environ.get('DATABASE_URL')
        if database_url:
            return _normalize_database_url(database_url)
        # Fallback for local development
        return 'sqlite:///' + os.path.join(basedir, 'instance', 'painterflow.db')

    SQLALCHEMY_DATABASE_URI = None  # Will be set in __init__
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }

    # Session Configuration
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)
    REMEMBER_COOKIE_DURATION = timedelta(days=14)
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'None'
    SESSION_COOKIE_NAME = 'painterflow_auth'

    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get('CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000').split(',')
        if origin.strip()
    ]
    CORS_SUPPORTS_CREDENTIALS = True

    # --- Auth ---
    AUTH_REQUIRE_EMAIL_CONFIRMATION = _env_flag('AUTH_REQUIRE_EMAIL_CONFIRMATION')
    EMAIL_CONFIRMATION_MAX_AGE = int(os.environ.get('EMAIL_CONFIRMATION_MAX_AGE', 60 * 60 * 24 * 3))
    PASSWORD_MIN_LENGTH = 6

    # --- Business & Report Settings ---
    TIMEZONE = os.environ.get('TIMEZONE', 'America/Los_Angeles')
    DEFAULT_TAX_RATE = float(os.environ.get('DEFAULT_TAX_RATE', 0))
    DEFAULT_QUOTE_VALID_DAYS = int(os.environ.get('DEFAULT_QUOTE_VALID_DAYS', 30))
    DEFAULT_QUOTE_TERMS = os.environ.get(
        'DEFAULT_QUOTE_TERMS',
        'Payment due within 30 days of project completion. 50% deposit required to begin work.'
    )

    COMPANY_NAME = os.environ.get('COMPANY_NAME', 'Painterflow Painting Co.')
    COMPANY_ADDRESS = os.environ.get('COMPANY_ADDRESS', '123 Main Street, Anytown, CA 92000')
    COMPANY_PHONE = os.environ.get('COMPANY_PHONE', '(555) 555-5555')
    COMPANY_EMAIL = os.environ.get('COMPANY_EMAIL', 'office@painterflow.example')

    # Optional third-party address autocomplete key, exposed to the client
    ADDRESS_AUTOCOMPLETE_KEY = os.environ.get('ADDRESS_AUTOCOMPLETE_KEY')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    def __init__(self):
        """Initialize configuration with proper database URL"""
        self.SQLALCHEMY_DATABASE_URI = self.get_database_url()


class DevelopmentConfig(Config):
    """Development configuration for local testing"""
    DEBUG = True
    DEVELOPMENT = True

    def __init__(self):
        super().__init__()

        # Relaxed settings for development
        self.SESSION_COOKIE_SECURE = False
        self.SESSION_COOKIE_SAMESITE = 'Lax'

        dev_database_url = os.environ.get('DEV_DATABASE_URL')
        if dev_database_url:
            self.SQLALCHEMY_DATABASE_URI = _normalize_database_url(dev_database_url)


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    DEVELOPMENT = False

    def __init__(self):
        super().__init__()

        secret_key = os.environ.get('SECRET_KEY')
        if not secret_key:
            raise ValueError("SECRET_KEY environment variable is required for production")
        self.SECRET_KEY = secret_key

        database_url = os.environ.get('DATABASE_URL')
        if not database_url:
            raise ValueError("DATABASE_URL environment variable is required for production")
        self.SQLALCHEMY_DATABASE_URI = _normalize_database_url(database_url)

        self.SQLALCHEMY_ENGINE_OPTIONS = {
            'pool_recycle': 3600,
            'pool_pre_ping': True,
            'pool_size': 10,
            'max_overflow': 20,
            'pool_timeout': 30,
        }


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SECRET_KEY = 'testing-secret-key'

    def __init__(self):
        super().__init__()
        self.SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
        self.SQLALCHEMY_ENGINE_OPTIONS = {}
        self.SESSION_COOKIE_SECURE = False
        self.SESSION_COOKIE_SAMESITE = 'Lax'
        self.AUTH_REQUIRE_EMAIL_CONFIRMATION = False
        self.TIMEZONE = 'America/Los_Angeles'
        self.CORS_ORIGINS = ['*']


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config_name():
    """Detect environment from FLASK_ENV and friends"""
    flask_env = os.environ.get('FLASK_ENV', '').lower()
    if flask_env in ['production', 'testing', 'development']:
        return flask_env

    if os.environ.get('TESTING') or os.environ.get('CI'):
        return 'testing'

    return 'development'


__all__ = [
    'config',
    'get_config_name',
]
