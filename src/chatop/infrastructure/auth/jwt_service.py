"""JWT token service.

Issues and verifies the HMAC-SHA256 signed bearer tokens used for
authentication. Every token lives for a fixed 30 minutes and embeds the
user's token version so that a later login revokes it.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Protocol

import jwt
from pydantic import ValidationError

from chatop.infrastructure.auth.token_types import TokenClaims


class JWTError(Exception):
    """Base exception for JWT-related errors."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a correctly signed token is past its expiry."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token's structure or signature is invalid."""

    pass


class TokenSubject(Protocol):
    """What the service needs to know about a user to issue a token."""

    email: str
    name: str
    token_version: int


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JWTService:
    """Service for issuing and verifying bearer tokens.

    The signing key is injected at construction time and never changes for
    the lifetime of the instance. The clock is injectable so expiry can be
    tested against a fixed time.
    """

    ALGORITHM = "HS256"
    LIFETIME = timedelta(minutes=30)
    REQUIRED_CLAIMS = ["sub", "iat", "exp"]

    def __init__(
        self,
        secret_key: str,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the JWT service.

        Args:
            secret_key: HMAC key used to sign and verify tokens.
            clock: Returns the current timezone-aware time.
        """
        if not secret_key:
            raise ValueError("A signing key is required")
        self._secret_key = secret_key
        self._clock = clock

    def issue(self, user: TokenSubject) -> str:
        """Issue a signed token for a user.

        Args:
            user: The user the token identifies. Its current token version is
                copied into the claims.

        Returns:
            Compact JWS representation of the token.
        """
        now = self._clock()
        claims = TokenClaims(
            sub=user.email,
            iat=int(now.timestamp()),
            exp=int((now + self.LIFETIME).timestamp()),
            name=user.name,
            tokenVersion=user.token_version,
        )
        return jwt.encode(claims.to_payload(), self._secret_key, algorithm=self.ALGORITHM)

    def verify_and_decode(self, token: str) -> TokenClaims:
        """Verify a token's signature and expiry and return its claims.

        Only HS256 is accepted; unsigned tokens and tokens declaring any other
        algorithm fail signature verification.

        Args:
            token: The encoded JWT.

        Returns:
            The decoded claims.

        Raises:
            InvalidTokenError: If the structure, signature or claims are invalid.
            TokenExpiredError: If the token is well formed but expired.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={
                    "require": self.REQUIRED_CLAIMS,
                    # Time checks run against the injected clock below
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
            claims = TokenClaims.model_validate(payload)
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e
        except ValidationError as e:
            raise InvalidTokenError("Invalid token claims") from e

        if claims.expires_at < self._clock().timestamp():
            raise TokenExpiredError("Token has expired")
        return claims

    @staticmethod
    def extract_subject(claims: TokenClaims) -> str:
        return claims.subject

    @staticmethod
    def extract_token_version(claims: TokenClaims) -> int:
        return claims.token_version

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return int(self.LIFETIME.total_seconds())
