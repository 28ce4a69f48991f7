"""
Configuration Management
Production-grade configuration with environment variables
"""

import os
from pathlib import Path

# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Config:
    """Base configuration"""
    SECRET_KEY = os.environ.get('SECRET_KEY', 'lease-ledger-secret-key-change-in-production')
    DATABASE_PATH = Path(os.environ.get('LEASE_LEDGER_DB', BASE_DIR / 'lease_ledger.db'))
    LOG_DIR = Path(os.environ.get('LEASE_LEDGER_LOG_DIR', BASE_DIR / 'logs'))
    LOG_TO_FILE = True

    # Flask settings
    FLASK_ENV = os.environ.get('FLASK_ENV', 'development')
    DEBUG = FLASK_ENV == 'development'
    TESTING = False

    # API settings
    API_HOST = os.environ.get('API_HOST', 'localhost')
    API_PORT = int(os.environ.get('API_PORT', 5001))

    # CORS settings
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')

    # Bearer tokens
    TOKEN_BYTES = 32

    # Logging
    LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
    LOG_BACKUP_COUNT = 5


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False


class TestingConfig(Config):
    """Test configuration - console logging only"""
    TESTING = True
    DEBUG = False
    LOG_TO_FILE = False


# Get configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
