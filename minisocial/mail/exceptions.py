class MailError(Exception):
    """Base class for every mail delivery error."""

    pass


class AuthenticationError(MailError):
    """Provider rejected the credentials."""

    pass


class ConnectionError(MailError):
    """Provider could not be reached or is unavailable."""

    pass


class ClientNotInitializedError(MailError):
    pass


class SendError(MailError):
    """The message was not accepted for delivery."""

    pass


class LimitExceededException(MailError):
    """Provider sending quota or rate exceeded."""

    pass


class ValidationError(MailError):
    """Provider rejected the request parameters."""

    pass


class UnexpectedClientError(MailError):
    pass
