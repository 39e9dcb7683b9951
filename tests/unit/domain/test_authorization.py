"""Unit tests for ownership checks."""

from dataclasses import dataclass

import pytest

from chatop.core.exceptions import ErrorKind, UnauthorizedError
from chatop.domain.services import check_ownership, require_ownership, require_sender
from chatop.infrastructure.auth import AuthenticatedUser

ALICE = AuthenticatedUser(id=1, email="alice@example.com", name="Alice", token_version=1)
BOB = AuthenticatedUser(id=2, email="bob@example.com", name="Bob", token_version=1)


@dataclass
class Listing:
    owner_id: int
    name: str = "Seaside Apartment"


def test_check_ownership_match():
    assert check_ownership(1, ALICE) is None


def test_check_ownership_mismatch():
    assert check_ownership(1, BOB) == ErrorKind.UNAUTHORIZED


def test_require_ownership_returns_resource_unchanged():
    listing = Listing(owner_id=1)

    assert require_ownership(listing, ALICE) is listing
    assert listing == Listing(owner_id=1)


def test_require_ownership_rejects_non_owner():
    listing = Listing(owner_id=1)

    with pytest.raises(UnauthorizedError) as exc_info:
        require_ownership(listing, BOB)

    assert exc_info.value.kind == ErrorKind.UNAUTHORIZED
    assert listing == Listing(owner_id=1)


def test_require_sender_accepts_caller():
    require_sender(2, BOB)


def test_require_sender_rejects_impersonation():
    with pytest.raises(UnauthorizedError):
        require_sender(1, BOB)
