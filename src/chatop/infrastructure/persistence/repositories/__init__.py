"""Repositories for database operations."""

from chatop.infrastructure.persistence.repositories.message_repository import MessageRepository
from chatop.infrastructure.persistence.repositories.rental_repository import RentalRepository
from chatop.infrastructure.persistence.repositories.user_repository import UserRepository

__all__ = [
    "MessageRepository",
    "RentalRepository",
    "UserRepository",
]
