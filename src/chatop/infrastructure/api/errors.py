"""Translation of error kinds into HTTP responses.

This is the only place where an ``ErrorKind`` becomes a status code and a
JSON body. The authentication middleware and the exception handlers
registered on the application both go through ``error_response``.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from chatop.core.exceptions import DEFAULT_MESSAGES, ChatopError, ErrorKind
from chatop.core.logging import get_logger

logger = get_logger(__name__)

AUTHENTICATION_ERRORS = frozenset(
    {
        ErrorKind.MISSING_AUTH,
        ErrorKind.MALFORMED_TOKEN,
        ErrorKind.EXPIRED_TOKEN,
        ErrorKind.REVOKED_TOKEN,
        ErrorKind.INVALID_CREDENTIALS,
    }
)

ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.MISSING_AUTH: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.MALFORMED_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.EXPIRED_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.REVOKED_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorKind.EMAIL_ALREADY_IN_USE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.RENTAL_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_PICTURE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.SERVICE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(
    kind: ErrorKind,
    message: str | None = None,
    during_authentication: bool = False,
) -> JSONResponse:
    """Build the HTTP response for an error kind.

    Args:
        kind: The error kind to translate.
        message: Overrides the default message for the kind.
        during_authentication: The error was produced while authenticating
            the request. An unknown token subject is then a 401, not a 404.

    Returns:
        JSONResponse: ``{"error": <kind>, "message": <text>}`` with the mapped status.
    """
    status_code = ERROR_STATUS.get(kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    headers = None
    if kind in AUTHENTICATION_ERRORS or during_authentication:
        status_code = status.HTTP_401_UNAUTHORIZED
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=status_code,
        content={"error": kind.value, "message": message or DEFAULT_MESSAGES[kind]},
        headers=headers,
    )


def _field_name(loc: tuple) -> str:
    # loc is ("body", "email") or ("body", "picture") for forms and JSON alike
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "form")]
    return ".".join(parts) or "request"


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(ChatopError)
    async def chatop_error_handler(request: Request, exc: ChatopError) -> JSONResponse:
        logger.info(
            "Request failed",
            path=request.url.path,
            method=request.method,
            error=exc.kind.value,
        )
        return error_response(exc.kind, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors: dict[str, str] = {}
        for error in exc.errors():
            errors.setdefault(_field_name(tuple(error.get("loc", ()))), error.get("msg", "invalid"))
        logger.info("Request validation failed", path=request.url.path, fields=list(errors))
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=errors)

    @app.exception_handler(OperationalError)
    async def database_unavailable_handler(
        request: Request, exc: OperationalError
    ) -> JSONResponse:
        logger.warning("Database unavailable", path=request.url.path, error=str(exc.orig))
        return error_response(ErrorKind.SERVICE_UNAVAILABLE)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url.path),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "internal_error", "message": "An unexpected error occurred"},
        )
