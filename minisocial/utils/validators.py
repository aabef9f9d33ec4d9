"""
Validation utilities for incoming request payloads.
"""
import re

from minisocial.errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72

MAX_POST_ID = 2 ** 63 - 1


def get_payload(request):
    """
    Return the JSON body as a dict; anything else is treated as empty.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return {}
    return data


def normalize_text(raw_value):
    """
    Strip a string field. Returns None for missing, non-string or blank values.
    """
    if raw_value is None or not isinstance(raw_value, str):
        return None
    value = raw_value.strip()
    return value or None


def normalize_username(raw_username, min_length=3, max_length=64):
    """
    Normalize username strings while enforcing basic length + type checks.
    """
    username = normalize_text(raw_username)
    if not username:
        raise ValidationError("Username is required.")
    if len(username) < min_length:
        raise ValidationError(f"Username must be at least {min_length} characters long.")
    if len(username) > max_length:
        raise ValidationError(f"Username must be at most {max_length} characters long.")
    return username


def validate_password(password, min_length=6):
    if not password or not isinstance(password, str):
        raise ValidationError("Password is required.")
    if len(password) < min_length:
        raise ValidationError(f"Password must be at least {min_length} characters long.")
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValidationError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes long.")
    return password


def normalize_email(raw_email, required=False):
    """
    Validate an email address. Returns None when absent and not required.
    """
    email = normalize_text(raw_email)
    if not email:
        if required:
            raise ValidationError("Email is required.")
        return None
    if len(email) > 255 or not EMAIL_PATTERN.match(email):
        raise ValidationError("Email address is not valid.")
    return email


def parse_post_id(raw_post_id):
    """
    Post ids are positive integers; anything else is malformed.
    """
    if isinstance(raw_post_id, bool):
        raise ValidationError("Invalid post id.")
    if isinstance(raw_post_id, int):
        post_id = raw_post_id
    elif isinstance(raw_post_id, str) and raw_post_id.strip().isdecimal():
        post_id = int(raw_post_id.strip())
    else:
        raise ValidationError("Invalid post id.")
    if post_id <= 0 or post_id > MAX_POST_ID:
        raise ValidationError("Invalid post id.")
    return post_id
