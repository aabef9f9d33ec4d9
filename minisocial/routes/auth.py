"""
Account routes: registration, login and password reset.
"""
from flask import Blueprint, jsonify, request

from minisocial.services import get_services
from minisocial.utils.validators import get_payload

auth_bp = Blueprint('auth', __name__, url_prefix='/api')


@auth_bp.route('/register', methods=['POST'])
def register():
    data = get_payload(request)
    result = get_services().auth.register(
        data.get('username'),
        data.get('password'),
        data.get('email'),
    )
    return jsonify(result), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    data = get_payload(request)
    user = get_services().auth.login(data.get('username'), data.get('password'))
    return jsonify(user), 200


@auth_bp.route('/forgot-password', methods=['POST'])
def forgot_password():
    """Same response whether or not the email belongs to an account."""
    data = get_payload(request)
    message = get_services().auth.forgot_password(data.get('email'))
    return jsonify({'message': message}), 200


@auth_bp.route('/reset-password', methods=['POST'])
def reset_password():
    data = get_payload(request)
    message = get_services().auth.reset_password(data.get('token'), data.get('password'))
    return jsonify({'message': message}), 200
