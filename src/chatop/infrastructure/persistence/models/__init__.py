"""SQLAlchemy models for the ChaTop tables.

All models inherit from the Base class defined in database.py.
"""

from chatop.infrastructure.persistence.models.message import MessageModel
from chatop.infrastructure.persistence.models.rental import RentalModel
from chatop.infrastructure.persistence.models.user import UserModel

__all__ = [
    "MessageModel",
    "RentalModel",
    "UserModel",
]
