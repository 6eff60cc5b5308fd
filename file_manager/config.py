"""
Configuration management for the file manager application.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Base directory
BASE_DIR = Path(__file__).parent.parent


class Config:
    """Base configuration class."""

    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = False
    TESTING = False

    # Database settings
    DATABASE_PATH = BASE_DIR / os.getenv('DATABASE_PATH', 'data/file_manager.db')

    # Public file serving
    PUBLIC_URL_PREFIX = os.getenv('PUBLIC_URL_PREFIX', '')

    # AWS settings (only needed for s3:// file URLs)
    AWS_ACCESS_KEY_ID = os.getenv('AWS_ACCESS_KEY_ID')
    AWS_SECRET_ACCESS_KEY = os.getenv('AWS_SECRET_ACCESS_KEY')
    AWS_REGION = os.getenv('AWS_REGION', 'us-east-1')
    PRESIGNED_URL_EXPIRES = int(os.getenv('PRESIGNED_URL_EXPIRES', '3600'))

    # Translation
    DEFAULT_LOCALE = os.getenv('DEFAULT_LOCALE', 'en')

    # Acting user when the session carries none
    DEFAULT_USER_ID = int(os.getenv('DEFAULT_USER_ID', '0'))

    @staticmethod
    def validate_aws_config(config):
        """
        Validate the AWS credentials in a config mapping.

        Credentials are optional (boto3 falls back to its own chain), but a
        key id without a secret, or the reverse, is a mistake.
        """
        pair = ['AWS_ACCESS_KEY_ID', 'AWS_SECRET_ACCESS_KEY']
        missing_vars = [var for var in pair if not config.get(var)]

        if len(missing_vars) == 1:
            raise ValueError(
                f"Missing required configuration: {missing_vars[0]}. "
                "Set both AWS credentials or neither."
            )


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    FLASK_ENV = 'development'


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    FLASK_ENV = 'production'


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SECRET_KEY = 'testing-secret-key'
    # Each query opens its own connection, so tests point this at a temp file
    DATABASE_PATH = BASE_DIR / 'data' / 'test_file_manager.db'
    DEFAULT_USER_ID = 1


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(config_name=None):
    """Get configuration based on environment."""
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')
    return config.get(config_name, DevelopmentConfig)
