"""Error kinds and domain exceptions.

Every failure that can reach a client is described by an ``ErrorKind``.
Services raise ``ChatopError`` subclasses carrying a kind; the authentication
gate returns the kind directly. The API layer is the only place that turns a
kind into an HTTP response.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Client-visible error kinds."""

    MISSING_AUTH = "missing_auth"
    MALFORMED_TOKEN = "malformed_token"
    EXPIRED_TOKEN = "expired_token"
    REVOKED_TOKEN = "revoked_token"
    INVALID_CREDENTIALS = "invalid_credentials"
    UNAUTHORIZED = "unauthorized"
    EMAIL_ALREADY_IN_USE = "email_already_in_use"
    USER_NOT_FOUND = "user_not_found"
    RENTAL_NOT_FOUND = "rental_not_found"
    INVALID_PICTURE = "invalid_picture"
    SERVICE_UNAVAILABLE = "service_unavailable"


DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.MISSING_AUTH: "unauthorized access",
    ErrorKind.MALFORMED_TOKEN: "invalid token",
    ErrorKind.EXPIRED_TOKEN: "JWT token has expired",
    ErrorKind.REVOKED_TOKEN: "token has been revoked",
    ErrorKind.INVALID_CREDENTIALS: "invalid credentials",
    ErrorKind.UNAUTHORIZED: "unauthorized access",
    ErrorKind.EMAIL_ALREADY_IN_USE: "email address already in use",
    ErrorKind.USER_NOT_FOUND: "user not found",
    ErrorKind.RENTAL_NOT_FOUND: "rental not found",
    ErrorKind.INVALID_PICTURE: "invalid picture",
    ErrorKind.SERVICE_UNAVAILABLE: "service unavailable",
}


class ChatopError(Exception):
    """Base class for errors that map to a client-visible error kind."""

    kind: ErrorKind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str | None = None, kind: ErrorKind | None = None) -> None:
        if kind is not None:
            self.kind = kind
        self.message = message or DEFAULT_MESSAGES[self.kind]
        super().__init__(self.message)


class InvalidCredentialsError(ChatopError):
    """Raised when login fails. Never says which half of the pair was wrong."""

    kind = ErrorKind.INVALID_CREDENTIALS


class EmailAlreadyInUseError(ChatopError):
    kind = ErrorKind.EMAIL_ALREADY_IN_USE


class UnauthorizedError(ChatopError):
    """Raised when an authenticated user may not act on a resource."""

    kind = ErrorKind.UNAUTHORIZED


class UserNotFoundError(ChatopError):
    kind = ErrorKind.USER_NOT_FOUND


class RentalNotFoundError(ChatopError):
    kind = ErrorKind.RENTAL_NOT_FOUND

    def __init__(self, rental_id: int) -> None:
        self.rental_id = rental_id
        super().__init__(f"Rental with ID {rental_id} not found")


class InvalidPictureError(ChatopError):
    kind = ErrorKind.INVALID_PICTURE
