"""
Post routes: feeds, post creation and likes.
"""
from flask import Blueprint, jsonify, request

from minisocial.services import get_services
from minisocial.utils.validators import get_payload

posts_bp = Blueprint('posts', __name__, url_prefix='/api/posts')


@posts_bp.route('', methods=['GET'])
def list_posts():
    """Global feed, newest first."""
    return jsonify(get_services().feed.list_global()), 200


@posts_bp.route('', methods=['POST'])
def create_post():
    data = get_payload(request)
    post = get_services().feed.create_post(
        data.get('username'),
        data.get('text'),
        data.get('image'),
    )
    return jsonify(post), 201


@posts_bp.route('/user/<username>', methods=['GET'])
def list_user_posts(username):
    return jsonify(get_services().feed.list_by_user(username)), 200


@posts_bp.route('/followed/<username>', methods=['GET'])
def list_followed_posts(username):
    """Posts by the accounts `username` follows, plus their own."""
    return jsonify(get_services().feed.list_followed(username)), 200


@posts_bp.route('/<post_id>/like', methods=['POST'])
def toggle_like(post_id):
    data = get_payload(request)
    post = get_services().engagement.toggle_like(post_id, data.get('username'))
    return jsonify(post), 200
