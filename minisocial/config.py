"""
Application configuration.
"""
import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    DEBUG = os.environ.get('FLASK_DEBUG', 'False').lower() == 'true'
    TESTING = False

    # Persistence (required; checked at startup)
    DATABASE_URL = os.environ.get('DATABASE_URL')

    # Third-party text rewrite key handed to clients via /api/config
    GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY') or None

    # Password reset
    APP_BASE_URL = os.environ.get('APP_BASE_URL', 'http://localhost:5000').rstrip('/')
    RESET_TOKEN_TTL_SECONDS = int(os.environ.get('RESET_TOKEN_TTL_SECONDS', 60 * 60))

    # Mail: 'log' writes messages to the application log, 'ses' sends via AWS SES
    MAIL_BACKEND = os.environ.get('MAIL_BACKEND', 'log').lower()
    MAIL_FROM = os.environ.get('MAIL_FROM', 'no-reply@localhost')
    AWS_ACCESS_KEY_ID = os.environ.get('AWS_ACCESS_KEY_ID')
    AWS_SECRET_ACCESS_KEY = os.environ.get('AWS_SECRET_ACCESS_KEY')
    AWS_REGION = os.environ.get('AWS_REGION', 'us-east-1')

    # Auth
    BCRYPT_ROUNDS = int(os.environ.get('BCRYPT_ROUNDS', 12))
    MIN_USERNAME_LENGTH = 3
    MAX_USERNAME_LENGTH = 64
    MIN_PASSWORD_LENGTH = 6

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()


class TestConfig(Config):
    """Configuration used by the test suite."""
    TESTING = True
    DEBUG = False
    DATABASE_URL = 'sqlite://'
    GEMINI_API_KEY = None
    APP_BASE_URL = 'http://testserver'
    MAIL_BACKEND = 'log'
    BCRYPT_ROUNDS = 4
