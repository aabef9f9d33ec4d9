import re

import pytest

from minisocial import create_app
from minisocial.config import TestConfig
from minisocial.mail.base_client import MailClient
from minisocial.services import EXTENSION_KEY


class RecordingMailClient(MailClient):
    """Keeps sent messages in memory; can be told to fail."""

    def __init__(self):
        self.sent = []
        self.fail_with = None

    def send_email(self, message):
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(message)
        return f"test-{len(self.sent)}"

    def last_token(self):
        match = re.search(r"token=([0-9a-f]+)", self.sent[-1].text_body)
        return match.group(1)


@pytest.fixture
def mail_client():
    """In-memory mail client injected into the app"""
    return RecordingMailClient()


@pytest.fixture
def app(mail_client):
    """App on a fresh in-memory SQLite database"""
    app = create_app(TestConfig, mail_client=mail_client)
    yield app
    app.extensions[EXTENSION_KEY].store.dispose()


@pytest.fixture
def services(app):
    return app.extensions[EXTENSION_KEY]


@pytest.fixture
def client(app):
    """Flask test client"""
    return app.test_client()


@pytest.fixture
def register(services):
    """Register a user through the auth service"""

    def _register(username, password="secret1", email=None):
        return services.auth.register(username, password, email)

    return _register
