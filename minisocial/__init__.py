"""
Main Flask application factory.
"""
import logging

from flask import Flask

from minisocial.config import Config
from minisocial.database import Store
from minisocial.mail import AWSSESCredentials, LogMailClient, SESClient
from minisocial.services import EXTENSION_KEY, build_services

logger = logging.getLogger(__name__)


def create_mail_client(config):
    """Pick the mail backend named by MAIL_BACKEND."""
    backend = config.MAIL_BACKEND
    if backend == 'ses':
        return SESClient.get_client(AWSSESCredentials(
            aws_access_key_id=config.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=config.AWS_SECRET_ACCESS_KEY,
            aws_region_name=config.AWS_REGION,
        ))
    if backend == 'log':
        return LogMailClient()
    raise ValueError(f"Unknown MAIL_BACKEND '{backend}' (expected 'log' or 'ses')")


def create_app(config_class=Config, store=None, mail_client=None):
    """
    Create and configure the Flask application.

    The store is initialized synchronously; an unreachable database raises
    StartupError and the process should not start.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Register blueprints
    from minisocial.routes.api import api_bp
    from minisocial.routes.auth import auth_bp
    from minisocial.routes.errors import register_error_handlers
    from minisocial.routes.main import main_bp
    from minisocial.routes.posts import posts_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(posts_bp)
    register_error_handlers(app)

    # Initialize persistence + service layer
    if store is None:
        store = Store(config_class.DATABASE_URL)
    store.init()
    if mail_client is None:
        mail_client = create_mail_client(config_class)

    app.extensions[EXTENSION_KEY] = build_services(store, mail_client, config_class)
    logger.info(f"Application ready (mail backend: {type(mail_client).__name__})")

    return app
