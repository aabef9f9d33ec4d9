"""
Registration, login and password reset backed by the user store.
"""
from __future__ import annotations

import logging
import secrets
from datetime import timedelta
from typing import Optional

import bcrypt
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError

from minisocial.database import Store
from minisocial.errors import AuthError, ConflictError, ServerError, TokenError, ValidationError
from minisocial.mail.base_client import MailClient
from minisocial.mail.exceptions import MailError
from minisocial.mail.schemas import EmailMessage
from minisocial.models import User, utcnow
from minisocial.utils.validators import (
    normalize_email,
    normalize_text,
    normalize_username,
    validate_password,
)

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = (
    "If an account with that email exists, a password reset link has been sent."
)
RESET_SUCCESS_MESSAGE = "Password has been reset successfully. You can now log in."

RESET_EMAIL_SUBJECT = "Password reset request"
RESET_EMAIL_BODY = (
    "You are receiving this because you (or someone else) requested a password reset "
    "for your account.\n\n"
    "Open the following link within {minutes} minutes to choose a new password:\n\n"
    "{link}\n\n"
    "If you did not request this, ignore this email and your password will remain unchanged.\n"
)


def hash_password(password: str, rounds: int = 12) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def check_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


class AuthService:
    """
    Password authentication and the reset-token state machine:
    no request -> token issued -> consumed. Expiry is checked lazily on reset.
    """

    def __init__(self, store: Store, mail_client: MailClient, config):
        self.store = store
        self.mail_client = mail_client
        self.config = config

    def register(self, username, password, email=None) -> dict:
        username = normalize_username(
            username,
            self.config.MIN_USERNAME_LENGTH,
            self.config.MAX_USERNAME_LENGTH,
        )
        validate_password(password, self.config.MIN_PASSWORD_LENGTH)
        email = normalize_email(email)

        try:
            with self.store.session() as session:
                if self._find_by_username(session, username):
                    raise ConflictError("Username is already taken.")
                if email and self._find_by_email(session, email):
                    raise ConflictError("Email is already registered.")

                session.add(User(
                    username=username,
                    email=email,
                    password_hash=hash_password(password, self.config.BCRYPT_ROUNDS),
                ))
        except IntegrityError:
            # Lost a race against a concurrent registration of the same name/email
            raise ConflictError("Username or email is already taken.")

        logger.info(f"Registered user '{username}'")
        return {"username": username}

    def login(self, username, password) -> dict:
        username = normalize_text(username)
        if not username or not password or not isinstance(password, str):
            raise ValidationError("Username and password are required.")

        with self.store.session() as session:
            user = self._find_by_username(session, username)
            if not user or not check_password(password, user.password_hash):
                logger.warning(f"Failed login for '{username}'")
                raise AuthError()
            return user.to_public_dict()

    def forgot_password(self, email) -> str:
        email = normalize_email(email, required=True)

        with self.store.session() as session:
            user = self._find_by_email(session, email)
            if not user:
                logger.info("Password reset requested for unknown email")
                return FORGOT_PASSWORD_MESSAGE

            token = secrets.token_hex(32)
            user.reset_token = token
            user.reset_token_expiry = utcnow() + timedelta(
                seconds=self.config.RESET_TOKEN_TTL_SECONDS
            )
            recipient = user.email
            username = user.username

        self._send_reset_email(recipient, token)
        logger.info(f"Password reset token issued for '{username}'")
        return FORGOT_PASSWORD_MESSAGE

    def reset_password(self, token, password) -> str:
        validate_password(password, self.config.MIN_PASSWORD_LENGTH)
        token = normalize_text(token)
        if not token:
            raise TokenError()

        new_hash = hash_password(password, self.config.BCRYPT_ROUNDS)
        with self.store.session() as session:
            # Matching, consuming and clearing the token is one statement,
            # so two concurrent resets cannot both succeed.
            result = session.execute(
                update(User)
                .where(User.reset_token == token, User.reset_token_expiry > utcnow())
                .values(password_hash=new_hash, reset_token=None, reset_token_expiry=None)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                raise TokenError()

        logger.info("Password reset token consumed")
        return RESET_SUCCESS_MESSAGE

    # Internal helpers -------------------------------------------------

    def _send_reset_email(self, recipient: str, token: str) -> None:
        link = f"{self.config.APP_BASE_URL}/reset-password.html?token={token}"
        message = EmailMessage(
            to=[recipient],
            from_email=self.config.MAIL_FROM,
            subject=RESET_EMAIL_SUBJECT,
            text_body=RESET_EMAIL_BODY.format(
                minutes=self.config.RESET_TOKEN_TTL_SECONDS // 60,
                link=link,
            ),
        )
        try:
            self.mail_client.send_email(message)
        except MailError as e:
            logger.error(f"Could not send password reset email: {e}")
            raise ServerError("Could not send password reset email. Please try again later.") from e

    @staticmethod
    def _find_by_username(session, username: str) -> Optional[User]:
        return session.execute(
            select(User).where(func.lower(User.username) == username.lower())
        ).scalar_one_or_none()

    @staticmethod
    def _find_by_email(session, email: str) -> Optional[User]:
        return session.execute(
            select(User).where(func.lower(User.email) == email.lower())
        ).scalar_one_or_none()
