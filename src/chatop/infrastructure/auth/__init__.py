"""Authentication infrastructure components.

This module provides password hashing, the JWT token service, and the
per-request authentication gate.
"""

from chatop.infrastructure.auth.authenticator import (
    Authenticator,
    GateResult,
    GateState,
    extract_bearer_token,
)
from chatop.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTError,
    JWTService,
    TokenExpiredError,
)
from chatop.infrastructure.auth.password_hasher import (
    DUMMY_PASSWORD_HASH,
    hash_password,
    needs_rehash,
    verify_password,
)
from chatop.infrastructure.auth.token_types import AuthenticatedUser, TokenClaims

__all__ = [
    "AuthenticatedUser",
    "Authenticator",
    "DUMMY_PASSWORD_HASH",
    "GateResult",
    "GateState",
    "InvalidTokenError",
    "JWTError",
    "JWTService",
    "TokenClaims",
    "TokenExpiredError",
    "extract_bearer_token",
    "hash_password",
    "needs_rehash",
    "verify_password",
]
