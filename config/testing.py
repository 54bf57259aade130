"""
Testing configuration for the HandyOps backend
"""
import os

from config.settings import Config


class TestingConfig(Config):
    """Testing configuration with isolated database and safe defaults"""

    TESTING = True
    DEBUG = False

    # Use in-memory SQLite for fast tests
    SQLALCHEMY_DATABASE_URI = os.getenv(
        'TEST_DATABASE_URL',
        'sqlite:///:memory:'
    )
    RECORD_STORE = 'sql'

    # Disable rate limiting in tests
    RATELIMIT_ENABLED = False

    UPLOAD_FOLDER = '/tmp/handyops_test_uploads'

    BUSINESS_NAME = 'Test Handyman Co'

    # Logging
    LOG_LEVEL = 'WARNING'

    CORS_ORIGINS = ['http://localhost:5173', 'http://localhost:3000']
