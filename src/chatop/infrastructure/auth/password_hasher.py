"""Password hashing utility using Argon2.

Provides salted, deliberately slow password hashing and verification using
the Argon2id algorithm. The salt is embedded in the hash output, so hashing
the same password twice yields different strings.
"""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

_hasher = PasswordHasher()

# Verified against when a login names an unknown email, so that both
# failure paths spend the same time hashing.
DUMMY_PASSWORD_HASH = _hasher.hash("chatop-dummy-password")


def hash_password(password: str) -> str:
    """Hash a password using Argon2id.

    Args:
        password: The plaintext password to hash.

    Returns:
        The hashed password string.

    Example:
        >>> hashed = hash_password("SecureP@ss123!")
        >>> hashed.startswith("$argon2id$")
        True
    """
    return _hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a hash.

    A mismatch or a malformed stored hash both return False; neither raises.

    Args:
        password: The plaintext password to verify.
        hashed: The hashed password to verify against.

    Returns:
        True if the password matches, False otherwise.
    """
    try:
        return _hasher.verify(hashed, password)
    except (VerificationError, InvalidHashError):
        return False


def needs_rehash(hashed: str) -> bool:
    """Check if a password hash was made with outdated parameters."""
    return _hasher.check_needs_rehash(hashed)
