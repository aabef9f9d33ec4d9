from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from minisocial import create_mail_client
from minisocial.config import TestConfig
from minisocial.mail import AWSSESCredentials, EmailMessage, LogMailClient, SESClient
from minisocial.mail.exceptions import (
    AuthenticationError,
    ConnectionError,
    LimitExceededException,
    SendError,
)


@pytest.fixture
def credentials():
    return AWSSESCredentials(
        aws_access_key_id="test-key",
        aws_secret_access_key="test-secret",
        aws_region_name="us-east-1",
    )


@pytest.fixture
def message():
    return EmailMessage(
        to=["alice@example.com"],
        from_email="no-reply@example.com",
        subject="Password reset request",
        text_body="reset link",
    )


@pytest.fixture(autouse=True)
def reset_ses_client():
    SESClient.reset_client()
    yield
    SESClient.reset_client()


def _client_error(code):
    return ClientError({"Error": {"Code": code, "Message": code}}, "SendEmail")


@patch("minisocial.mail.ses_client.boto3.client")
def test_ses_send_email(mock_boto_client, credentials, message):
    boto_client = MagicMock()
    boto_client.send_email.return_value = {"MessageId": "abc-123"}
    mock_boto_client.return_value = boto_client

    client = SESClient.get_client(credentials)
    message_id = client.send_email(message)

    assert message_id == "abc-123"
    kwargs = boto_client.send_email.call_args.kwargs
    assert kwargs["Source"] == "no-reply@example.com"
    assert kwargs["Destination"] == {"ToAddresses": ["alice@example.com"]}
    assert kwargs["Message"]["Body"]["Text"]["Data"] == "reset link"
    assert "Html" not in kwargs["Message"]["Body"]


@patch("minisocial.mail.ses_client.boto3.client")
def test_ses_client_is_shared(mock_boto_client, credentials):
    first = SESClient.get_client(credentials)
    second = SESClient.get_client(credentials)

    assert first is second
    mock_boto_client.assert_called_once()


@patch("minisocial.mail.ses_client.boto3.client")
def test_ses_bad_credentials_at_init(mock_boto_client, credentials):
    mock_boto_client.return_value.get_account_sending_enabled.side_effect = _client_error(
        "InvalidClientTokenId"
    )

    with pytest.raises(AuthenticationError):
        SESClient.get_client(credentials)


@pytest.mark.parametrize(
    "code, expected",
    [
        ("MessageRejected", SendError),
        ("ThrottlingException", LimitExceededException),
        ("ServiceUnavailable", ConnectionError),
    ],
)
@patch("minisocial.mail.ses_client.boto3.client")
def test_ses_send_errors(mock_boto_client, credentials, message, code, expected):
    mock_boto_client.return_value.send_email.side_effect = _client_error(code)
    client = SESClient.get_client(credentials)

    with pytest.raises(expected):
        client.send_email(message)


def test_log_mail_client_returns_id(message, caplog):
    with caplog.at_level("INFO"):
        message_id = LogMailClient().send_email(message)

    assert message_id.startswith("log-")
    assert "alice@example.com" in caplog.text


def test_create_mail_client_backends():
    class BadBackend(TestConfig):
        MAIL_BACKEND = "carrier-pigeon"

    assert isinstance(create_mail_client(TestConfig), LogMailClient)
    with pytest.raises(ValueError):
        create_mail_client(BadBackend)
