import logging
import uuid

from minisocial.mail.base_client import MailClient
from minisocial.mail.schemas import EmailMessage

logger = logging.getLogger(__name__)


class LogMailClient(MailClient):
    """Development mail client: writes the message to the log instead of sending it."""

    def send_email(self, message: EmailMessage) -> str:
        message_id = f"log-{uuid.uuid4().hex}"
        logger.info(
            f"Mail {message_id} to={message.to} subject={message.subject!r}\n{message.text_body}"
        )
        return message_id
