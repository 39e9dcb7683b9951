"""Ownership-based authorization checks.

Authorization is scoped to a single resource instance: the acting identity
must be the resource's recorded owner. Checks are pure comparisons and run
after authentication has resolved the identity.
"""

from typing import Protocol, TypeVar

from chatop.core.exceptions import ErrorKind, UnauthorizedError
from chatop.core.logging import get_logger
from chatop.infrastructure.auth.token_types import AuthenticatedUser

logger = get_logger(__name__)


class OwnedResource(Protocol):
    owner_id: int


R = TypeVar("R", bound=OwnedResource)


def check_ownership(owner_id: int, identity: AuthenticatedUser) -> ErrorKind | None:
    """Compare a resource owner with the acting identity.

    Returns:
        None when the identity owns the resource, ErrorKind.UNAUTHORIZED otherwise.
    """
    if owner_id != identity.id:
        return ErrorKind.UNAUTHORIZED
    return None


def require_ownership(resource: R, identity: AuthenticatedUser) -> R:
    """Return the resource unchanged if the identity owns it.

    Raises:
        UnauthorizedError: If the identity is not the owner.
    """
    if check_ownership(resource.owner_id, identity) is not None:
        logger.info(
            "Ownership check failed",
            resource=type(resource).__name__,
            owner_id=resource.owner_id,
            user_id=identity.id,
        )
        raise UnauthorizedError()
    return resource


def require_sender(sender_id: int, identity: AuthenticatedUser) -> None:
    """Ensure a declared sender is the acting identity.

    Raises:
        UnauthorizedError: If the payload claims another user as sender.
    """
    if check_ownership(sender_id, identity) is not None:
        logger.info("Sender check failed", sender_id=sender_id, user_id=identity.id)
        raise UnauthorizedError()
