"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env if present
load_dotenv()


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    TESTING = False

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Game Settings
    WORD_LENGTH = int(os.getenv('WORD_LENGTH', 5))
    MAX_GUESSES = int(os.getenv('MAX_GUESSES', 6))
    REFERENCE_TIMEZONE = os.getenv('REFERENCE_TIMEZONE', 'UTC')
    HISTORY_CAP = int(os.getenv('HISTORY_CAP', 100))
    FALLBACK_WORD = os.getenv('FALLBACK_WORD', 'REACT')
    WORD_LIST_FILE = os.getenv('WORD_LIST_FILE')

    # External Services
    DAILY_WORD_URL = os.getenv('DAILY_WORD_URL')
    DICTIONARY_API_URL = os.getenv(
        'DICTIONARY_API_URL', 'https://api.dictionaryapi.dev/api/v2/entries/en/{word}'
    )
    HTTP_TIMEOUT_SECONDS = float(os.getenv('HTTP_TIMEOUT_SECONDS', 5))

    # Storage Settings
    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_DB_NAME = os.getenv('MONGO_DB_NAME', 'daily_word')
    STORE_TTL_DAYS = int(os.getenv('STORE_TTL_DAYS', 365))
    SESSION_TTL_DAYS = int(os.getenv('SESSION_TTL_DAYS', 2))

    # Player Token Settings
    JWT_SECRET = os.getenv('JWT_SECRET', 'dev-jwt-secret-change-in-production')
    JWT_EXPIRATION_DAYS = int(os.getenv('JWT_EXPIRATION_DAYS', 365))

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    MONGO_URI = None
    DAILY_WORD_URL = None
    REFERENCE_TIMEZONE = 'UTC'
    JWT_SECRET = 'testing-secret'


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
