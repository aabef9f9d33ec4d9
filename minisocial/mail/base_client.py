from abc import ABC, abstractmethod

from minisocial.mail.schemas import EmailMessage


class MailClient(ABC):
    """
    Abstract base for outgoing mail. The auth service only depends on this
    interface, so the delivery backend is chosen at app construction time.
    """

    @abstractmethod
    def send_email(self, message: EmailMessage) -> str:
        """
        Send an email.

        Args:
            message: the message to deliver

        Returns:
            Provider message id

        Raises:
            MailError: any delivery failure (see minisocial.mail.exceptions)
        """
        pass
