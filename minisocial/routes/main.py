"""
Service-level routes (no HTML rendering).
"""
from flask import Blueprint, jsonify

main_bp = Blueprint('main', __name__)


@main_bp.route('/health')
def health():
    """Health check endpoint for uptime monitoring."""
    return jsonify({
        'status': 'healthy',
        'service': 'mini-social'
    }), 200
