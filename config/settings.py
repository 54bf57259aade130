"""
Configuration settings for different environments
"""
import logging
import os

from dotenv import load_dotenv

load_dotenv()

_startup_logger = logging.getLogger('handyops.startup')


def _database_url():
    """Return the configured database URL, normalising legacy postgres:// URLs."""
    url = os.environ.get('DATABASE_URL', '')
    if url.startswith('postgres://'):
        # SQLAlchemy 2.x only accepts the postgresql:// scheme
        url = url.replace('postgres://', 'postgresql://', 1)
    return url or 'sqlite:///handyops.db'


def _require_in_production(var_name, default):
    """Return env var value. Outside development, warn loudly if still using default."""
    value = os.environ.get(var_name, '')
    if value:
        return value
    if os.environ.get('FLASK_ENV', 'development') != 'development' and default:
        _startup_logger.warning(
            '%s is using an insecure default. Set it via environment variable!', var_name
        )
    return default


class Config:
    """Base configuration"""
    SECRET_KEY = _require_in_production('SECRET_KEY', 'dev-secret-key-change-in-production')

    # Database
    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Record store backend: sql, memory or remote
    RECORD_STORE = os.environ.get('RECORD_STORE', 'sql')
    REMOTE_STORE_URL = os.environ.get('REMOTE_STORE_URL', '')
    REMOTE_STORE_API_KEY = os.environ.get('REMOTE_STORE_API_KEY', '')
    REMOTE_STORE_TIMEOUT = float(os.environ.get('REMOTE_STORE_TIMEOUT', '10'))
    # Per-collection field renames for remote stores, e.g. {'jobs': {'price': 'price_c'}}
    REMOTE_FIELD_MAPS = {}

    # API
    API_PREFIX = '/api'
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')

    # Rate limiting
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = os.environ.get('REDIS_URL') or 'memory://'
    RATELIMIT_DEFAULT = '100 per minute'

    # Photo uploads
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB request body
    MAX_PHOTO_BYTES = 5 * 1024 * 1024
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or '/tmp/handyops_uploads'

    # Calendar
    CALENDAR_START_HOUR = 7
    CALENDAR_END_HOUR = 18
    DEFAULT_DROP_HOUR = 9
    MONTH_CELL_LIMIT = 3

    # Printed / emailed estimates
    BUSINESS_NAME = os.environ.get('BUSINESS_NAME', 'HandyOps Home Services')
    BUSINESS_PHONE = os.environ.get('BUSINESS_PHONE', '')
    BUSINESS_EMAIL = os.environ.get('BUSINESS_EMAIL', '')

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 20,
        'max_overflow': 40,
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }
