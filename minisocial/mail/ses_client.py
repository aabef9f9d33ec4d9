import logging
from typing import Any, ClassVar, Optional

import boto3
from botocore.exceptions import ClientError

from minisocial.mail.base_client import MailClient
from minisocial.mail.constants import (
    AWS_AUTH_ERROR_CODES,
    AWS_LIMIT_ERROR_CODES,
    AWS_SERVICE_ERROR_CODES,
    AWS_VALUE_ERROR_CODES,
)
from minisocial.mail.exceptions import (
    AuthenticationError,
    ClientNotInitializedError,
    ConnectionError,
    LimitExceededException,
    SendError,
    UnexpectedClientError,
    ValidationError,
)
from minisocial.mail.schemas import AWSSESCredentials, EmailMessage

logger = logging.getLogger(__name__)


class SESClient(MailClient):
    """Mail client backed by AWS SES."""

    _instance: ClassVar[Optional["SESClient"]] = None

    def __init__(self, client: Any):
        self._client = client

    @classmethod
    def get_client(cls, credentials: AWSSESCredentials) -> "SESClient":
        """
        Return the shared SES client, creating it on first use.

        Raises:
            AuthenticationError: credentials rejected
            LimitExceededException: AWS API rate exceeded
            ValidationError: invalid parameters
            ConnectionError: SES unreachable
        """
        if cls._instance is None:
            try:
                client = cls._initialize_client(credentials)
                cls._instance = cls(client)
            except Exception as e:
                logger.error(f"AWS SES client initialization failed: {e}")
                raise

        return cls._instance

    @classmethod
    def _initialize_client(cls, credentials: AWSSESCredentials) -> Any:
        try:
            client = boto3.client(
                service_name="ses",
                aws_access_key_id=credentials.aws_access_key_id,
                aws_secret_access_key=credentials.aws_secret_access_key,
                region_name=credentials.aws_region_name,
            )
            # Cheap call that fails fast on bad credentials
            client.get_account_sending_enabled()
            return client
        except ClientError as e:
            cls._handle_aws_common_errors(e)
            logger.error(f"Unexpected AWS SES client initialization error: {e}")
            raise UnexpectedClientError(
                f"Unexpected AWS SES client initialization error: {e}"
            ) from e
        except Exception as e:
            logger.error(f"AWS SES client initialization failed: {e}")
            raise ConnectionError(f"AWS SES client initialization failed: {e}") from e

    def send_email(self, message: EmailMessage) -> str:
        if self._client is None:
            raise ClientNotInitializedError(
                "SES client is not initialized. Call get_client() first."
            )

        try:
            email_args = {
                "Source": message.from_email,
                "Destination": {
                    "ToAddresses": message.to,
                },
                "Message": {
                    "Subject": {"Data": message.subject, "Charset": "UTF-8"},
                    "Body": {
                        "Text": {"Data": message.text_body, "Charset": "UTF-8"}
                    },
                },
            }

            if message.html_body:
                email_args["Message"]["Body"]["Html"] = {
                    "Data": message.html_body,
                    "Charset": "UTF-8",
                }

            response = self._client.send_email(**email_args)
            return response["MessageId"]

        except ClientError as e:
            self._handle_aws_common_errors(e)
            error_code = e.response.get("Error", {}).get("Code", "")
            if error_code in ("MessageRejected", "AccountSendingPausedException"):
                logger.error(f"SES refused the message ({error_code}): {e}")
                raise SendError(f"SES refused the message ({error_code}): {e}") from e
            logger.error(f"Unexpected SES send error: {e}")
            raise UnexpectedClientError(f"Unexpected SES send error: {e}") from e
        except Exception as e:
            logger.error(f"Sending email failed: {e}")
            raise SendError(f"Sending email failed: {e}") from e

    @classmethod
    def reset_client(cls) -> None:
        cls._instance = None

    @staticmethod
    def _handle_aws_common_errors(e: ClientError) -> None:
        """
        Map AWS common error codes onto mail exceptions.
        """
        error_code = e.response.get("Error", {}).get("Code", "")

        if error_code in AWS_AUTH_ERROR_CODES:
            logger.error(f"AWS authentication failed: {e}")
            raise AuthenticationError(f"AWS authentication failed: {e}") from e
        if error_code in AWS_LIMIT_ERROR_CODES:
            logger.error(f"AWS API limit exceeded: {e}")
            raise LimitExceededException(f"AWS API limit exceeded: {e}") from e
        if error_code in AWS_VALUE_ERROR_CODES:
            logger.error(f"AWS rejected the request: {e}")
            raise ValidationError(f"AWS rejected the request: {e}") from e
        if error_code in AWS_SERVICE_ERROR_CODES:
            logger.error(f"AWS service error: {e}")
            raise ConnectionError(f"AWS service error: {e}") from e
