"""API routes for ChaTop."""

from chatop.infrastructure.api.routes.auth_router import router as auth_router
from chatop.infrastructure.api.routes.messages_router import router as messages_router
from chatop.infrastructure.api.routes.rentals_router import router as rentals_router
from chatop.infrastructure.api.routes.users_router import router as users_router

__all__ = [
    "auth_router",
    "messages_router",
    "rentals_router",
    "users_router",
]
