"""Domain services."""

from chatop.domain.services.auth_service import AuthService
from chatop.domain.services.authorization import (
    OwnedResource,
    check_ownership,
    require_ownership,
    require_sender,
)
from chatop.domain.services.message_service import MessageService
from chatop.domain.services.rental_service import PictureUpload, RentalData, RentalService
from chatop.domain.services.user_service import UserService

__all__ = [
    "AuthService",
    "MessageService",
    "OwnedResource",
    "PictureUpload",
    "RentalData",
    "RentalService",
    "UserService",
    "check_ownership",
    "require_ownership",
    "require_sender",
]
