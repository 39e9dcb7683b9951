"""Authentication middleware for ChaTop.

Runs the authentication gate once per request. Rejected requests are
answered here and never reach a route handler; authenticated requests get
their identity attached to ``request.state.identity``.
"""

from fastapi import Request, Response
from sqlalchemy.exc import OperationalError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from chatop.core.exceptions import ErrorKind
from chatop.core.logging import get_logger
from chatop.infrastructure.api.errors import error_response
from chatop.infrastructure.auth.authenticator import Authenticator
from chatop.infrastructure.persistence.database import DatabaseManager
from chatop.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Middleware that authenticates every non-exempt request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Authenticate the request and enrich request state.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint to call.

        Returns:
            The response from the application, or a 401 response.
        """
        authenticator: Authenticator = request.app.state.authenticator
        db: DatabaseManager = request.app.state.db

        if authenticator.is_exempt(request.url.path):
            return await call_next(request)

        try:
            async with db.session() as session:
                result = await authenticator.authenticate(
                    path=request.url.path,
                    authorization=request.headers.get("Authorization"),
                    users=UserRepository(session),
                    current=getattr(request.state, "identity", None),
                )
        except OperationalError as e:
            logger.warning("Database unavailable during authentication", error=str(e.orig))
            return error_response(ErrorKind.SERVICE_UNAVAILABLE)

        if not result.allowed:
            return error_response(result.error, during_authentication=True)

        request.state.identity = result.identity
        return await call_next(request)
