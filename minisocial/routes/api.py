"""
API routes for users, the follow graph and client configuration.
"""
from flask import Blueprint, current_app, jsonify, request

from minisocial.services import get_services
from minisocial.utils.validators import get_payload

api_bp = Blueprint('api', __name__, url_prefix='/api')


@api_bp.route('/config', methods=['GET'])
def client_config():
    """
    Hand the text-rewrite key to the browser client, plus a flag so the
    client can disable the feature when no key is configured.
    """
    api_key = current_app.config.get('GEMINI_API_KEY')
    return jsonify({
        'apiKey': api_key,
        'rewriteEnabled': bool(api_key)
    }), 200


@api_bp.route('/users/<username>', methods=['GET'])
def get_user(username):
    return jsonify(get_services().social_graph.get_user(username)), 200


@api_bp.route('/follow', methods=['POST'])
def toggle_follow():
    """Follow/unfollow toggle. Responds with the follower's new following list."""
    data = get_payload(request)
    user = get_services().social_graph.toggle_follow(
        data.get('follower'),
        data.get('userToFollow'),
    )
    return jsonify(user), 200
