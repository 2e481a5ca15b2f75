import os
import secrets
from datetime import timedelta
from decimal import Decimal


class Config:
    """Base configuration"""
    # Generate a temporary key for development if not set
    _secret = os.environ.get('SECRET_KEY')
    if not _secret:
        _secret = secrets.token_hex(32)
        print("WARNING: Using auto-generated SECRET_KEY. Set SECRET_KEY environment variable for production.")
    SECRET_KEY = _secret

    # Database - Handle Heroku's postgres:// -> postgresql:// conversion
    database_url = os.environ.get('DATABASE_URL') or 'postgresql://localhost/jobboard'
    if database_url.startswith('postgres://'):
        database_url = database_url.replace('postgres://', 'postgresql://', 1)
    SQLALCHEMY_DATABASE_URI = database_url
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Database Connection Pool Configuration
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 20,           # Number of persistent connections to keep open
        'max_overflow': 40,        # Additional connections allowed above pool_size
        'pool_pre_ping': True,     # Test connection health before using
        'pool_recycle': 300,       # Recycle connections after 5 minutes
        'pool_timeout': 30,        # Timeout for getting connection from pool
    }

    # Session
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)
    SESSION_COOKIE_SECURE = bool(os.environ.get('DYNO')) or os.environ.get('FLASK_ENV') == 'production'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Error Tracking
    SENTRY_DSN = os.environ.get('SENTRY_DSN')

    # Rate limiting (impression endpoint)
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    IMPRESSION_RATE_LIMIT = os.environ.get('IMPRESSION_RATE_LIMIT', '60 per minute')

    # Reverse proxies in front of the app (Heroku router = 1); 0 ignores X-Forwarded-For
    TRUSTED_PROXY_HOPS = int(os.environ.get('TRUSTED_PROXY_HOPS', 1))

    # Sponsored listings ($1 buys 1000 impressions)
    SPONSOR_COST_PER_IMPRESSION = Decimal('0.001')
    SPONSOR_MIN_IMPRESSIONS = 1000
    IMPRESSION_DEDUP_WINDOW_MINUTES = 60
    LOW_IMPRESSIONS_THRESHOLD = 100

    # Ranking
    RANKING_PAGE_SIZE = 50
    RANKING_FETCH_LIMIT = 100

    # Application
    TRANSACTIONS_PER_PAGE = 50
    FIT_SCORE_CACHE_MINUTES = 60


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    SQLALCHEMY_ECHO = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    SESSION_COOKIE_SECURE = True

    # Add SSL mode for Postgres on Heroku if not already present
    if 'postgresql://' in Config.database_url and 'sslmode' not in Config.database_url:
        SQLALCHEMY_DATABASE_URI = Config.database_url + '?sslmode=require'


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    # In-memory SQLite unless a real database is provided (for CI)
    test_db_url = os.environ.get('TEST_DATABASE_URL') or 'sqlite://'
    if test_db_url.startswith('postgres://'):
        test_db_url = test_db_url.replace('postgres://', 'postgresql://', 1)
    SQLALCHEMY_DATABASE_URI = test_db_url
    # Pool sizing options are not accepted by SQLite's single-connection pool
    SQLALCHEMY_ENGINE_OPTIONS = {}
    RATELIMIT_ENABLED = False  # Disable rate limiting in tests
    LOGIN_DISABLED = True  # Disable Flask-Login authentication checks in tests


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
