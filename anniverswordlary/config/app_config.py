"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


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
    TARGET_WORD = os.getenv('TARGET_WORD', 'GOSSIP').upper()
    MESSAGE_CLEAR_SECONDS = float(os.getenv('MESSAGE_CLEAR_SECONDS', 1.0))

    # Hint Service Settings
    GEMINI_API_KEY = os.getenv('GEMINI_API_KEY') or os.getenv('API_KEY')
    GEMINI_MODEL = os.getenv('GEMINI_MODEL', 'gemini-3-flash-preview')
    HINT_TIMEOUT_SECONDS = float(os.getenv('HINT_TIMEOUT_SECONDS', 10))

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
    GEMINI_API_KEY = None
    MESSAGE_CLEAR_SECONDS = 0.0


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
