"""
Outgoing mail clients.
"""
from .base_client import MailClient
from .log_client import LogMailClient
from .schemas import AWSSESCredentials, EmailMessage
from .ses_client import SESClient

__all__ = ["MailClient", "LogMailClient", "SESClient", "EmailMessage", "AWSSESCredentials"]
