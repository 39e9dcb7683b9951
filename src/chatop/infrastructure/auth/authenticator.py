"""Authentication gate for bearer-token requests.

Implements the per-request authentication state machine:

    NO_AUTH -> HEADER_CHECKED -> TOKEN_DECODED -> NOT_EXPIRED
            -> VERSION_MATCHED -> AUTHENTICATED

Any failing check moves straight to REJECTED and skips the remaining checks.
Exempt paths go from NO_AUTH directly to BYPASSED. The gate never raises for
an authentication failure; it returns a ``GateResult`` naming the error kind.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from chatop.core.exceptions import ErrorKind
from chatop.core.logging import get_logger
from chatop.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTService,
    TokenExpiredError,
)
from chatop.infrastructure.auth.token_types import AuthenticatedUser
from chatop.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)

BEARER_SCHEME = "bearer"


class GateState(str, Enum):
    """States of a single request's authentication."""

    NO_AUTH = "no_auth"
    HEADER_CHECKED = "header_checked"
    TOKEN_DECODED = "token_decoded"
    NOT_EXPIRED = "not_expired"
    VERSION_MATCHED = "version_matched"
    AUTHENTICATED = "authenticated"
    BYPASSED = "bypassed"
    REJECTED = "rejected"


@dataclass(frozen=True)
class GateResult:
    """Terminal outcome of the gate for one request.

    Attributes:
        state: AUTHENTICATED, BYPASSED or REJECTED.
        identity: The resolved identity when authenticated.
        error: The error kind when rejected.
        rejected_at: The last state reached before rejection.
    """

    state: GateState
    identity: AuthenticatedUser | None = None
    error: ErrorKind | None = None
    rejected_at: GateState | None = None

    @property
    def allowed(self) -> bool:
        return self.state in (GateState.AUTHENTICATED, GateState.BYPASSED)

    @classmethod
    def authenticated(cls, identity: AuthenticatedUser) -> "GateResult":
        return cls(state=GateState.AUTHENTICATED, identity=identity)

    @classmethod
    def bypassed(cls) -> "GateResult":
        return cls(state=GateState.BYPASSED)

    @classmethod
    def rejected(cls, error: ErrorKind, at: GateState) -> "GateResult":
        return cls(state=GateState.REJECTED, error=error, rejected_at=at)


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header.

    Returns None when the header is absent, uses another scheme, or is
    otherwise malformed.
    """
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        return None
    return parts[1]


class Authenticator:
    """Resolves the identity of a request from its bearer token."""

    def __init__(self, jwt_service: JWTService, exempt_paths: Iterable[str]) -> None:
        """Initialize the authenticator.

        Args:
            jwt_service: Service used to verify tokens.
            exempt_paths: Path prefixes that skip authentication entirely.
        """
        self.jwt_service = jwt_service
        self.exempt_paths = tuple(exempt_paths)

    def is_exempt(self, path: str) -> bool:
        return path.startswith(self.exempt_paths)

    async def authenticate(
        self,
        path: str,
        authorization: str | None,
        users: UserRepository,
        current: AuthenticatedUser | None = None,
    ) -> GateResult:
        """Run the gate for one request.

        Args:
            path: Request path, checked against the exempt prefixes.
            authorization: Raw ``Authorization`` header value, if any.
            users: Repository used to load the token's subject.
            current: Identity already attached by an earlier stage. When set,
                it is kept as is.

        Returns:
            GateResult: The terminal state of the request.
        """
        if self.is_exempt(path):
            return GateResult.bypassed()

        if current is not None:
            return GateResult.authenticated(current)

        token = extract_bearer_token(authorization)
        if token is None:
            return self._reject(ErrorKind.MISSING_AUTH, GateState.NO_AUTH, path)

        try:
            claims = self.jwt_service.verify_and_decode(token)
        except InvalidTokenError:
            return self._reject(ErrorKind.MALFORMED_TOKEN, GateState.HEADER_CHECKED, path)
        except TokenExpiredError:
            return self._reject(ErrorKind.EXPIRED_TOKEN, GateState.TOKEN_DECODED, path)

        user = await users.get_by_email(self.jwt_service.extract_subject(claims))
        if user is None:
            return self._reject(ErrorKind.USER_NOT_FOUND, GateState.NOT_EXPIRED, path)

        if self.jwt_service.extract_token_version(claims) != user.token_version:
            return self._reject(ErrorKind.REVOKED_TOKEN, GateState.NOT_EXPIRED, path)

        return GateResult.authenticated(
            AuthenticatedUser(
                id=user.id,
                email=user.email,
                name=user.name,
                token_version=user.token_version,
            )
        )

    @staticmethod
    def _reject(error: ErrorKind, at: GateState, path: str) -> GateResult:
        logger.info("Authentication rejected", error=error.value, state=at.value, path=path)
        return GateResult.rejected(error, at)
