"""
Conversion of errors into JSON responses at the request boundary.
"""
import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from minisocial.errors import SocialError

logger = logging.getLogger(__name__)


def register_error_handlers(app):

    @app.errorhandler(SocialError)
    def handle_social_error(error):
        if error.status_code >= 500:
            logger.error(f"Request failed: {error.message}", exc_info=error.__cause__ or error)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({'message': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception(f"Unhandled error: {error}")
        return jsonify({'message': 'Server error'}), 500
