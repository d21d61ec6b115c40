"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from config.env
load_dotenv(Path(__file__).with_name('config.env'))

# 32-byte AES key for non-production use; set PUZZLE_KEY in the environment for deployments
DEFAULT_PUZZLE_KEY = 'B7Nw+9s+4aYvLHuXGgEcg2YkdE+5EYXPLkZXl2bqsx0='


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Puzzle Link Settings
    PUZZLE_KEY = os.getenv('PUZZLE_KEY', DEFAULT_PUZZLE_KEY)
    PUZZLE_PARAM = os.getenv('PUZZLE_PARAM', 'd')
    SHARE_BASE_URL = os.getenv('SHARE_BASE_URL')  # Falls back to the request host URL

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
    SHARE_BASE_URL = 'http://localhost:5173/'


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
