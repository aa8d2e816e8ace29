"""
Domain error vocabulary for the auth service.

Handlers translate these into HTTP responses; anything not listed here is an
unexpected failure and is reported as a generic 500.
"""


class AuthServiceError(Exception):
    """Base class for every error raised by the auth core."""

    message = "Authentication service error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)


class UserNotFound(AuthServiceError):
    message = "User not found"


class InvalidPassword(AuthServiceError):
    message = "Invalid password"


class DuplicateEmail(AuthServiceError):
    message = "User with this email already exists"


class HashingError(AuthServiceError):
    message = "Error hashing"


class RegistrationFailed(AuthServiceError):
    message = "Error creating user"


class AuthenticationFailed(AuthServiceError):
    message = "Error authenticating user"


class InvalidToken(Exception):
    """Raised when a session token is expired, tampered with or malformed."""
