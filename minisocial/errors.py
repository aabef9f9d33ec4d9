"""
Error taxonomy shared by the service layer and the HTTP boundary.
"""


class SocialError(Exception):
    """Base class for every error that maps onto an HTTP response."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {"message": self.message}


class ValidationError(SocialError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Invalid request."


class ConflictError(SocialError):
    """Username or email already taken."""

    status_code = 409
    default_message = "Resource already exists."


class AuthError(SocialError):
    """Bad credentials. The message never says which part was wrong."""

    status_code = 401
    default_message = "Invalid username or password."


class NotFoundError(SocialError):
    status_code = 404
    default_message = "Not found."


class TokenError(SocialError):
    """Password reset token missing, unknown or expired."""

    status_code = 400
    default_message = "Password reset token is invalid or has expired."


class ServerError(SocialError):
    status_code = 500
    default_message = "Server error"


class StartupError(RuntimeError):
    """Unrecoverable configuration or connectivity failure at process start."""

    pass


_STATUS_TO_ERROR = {
    400: ValidationError,
    401: AuthError,
    404: NotFoundError,
    409: ConflictError,
}


def error_for_status(status_code, message=None):
    """
    Rebuild a typed error from an HTTP status (used by the API client).

    A 400 is ambiguous between ValidationError and TokenError; the token
    message is used to tell them apart.
    """
    if status_code == 400 and message == TokenError.default_message:
        return TokenError(message)
    error_class = _STATUS_TO_ERROR.get(status_code, ServerError)
    return error_class(message)
