"""Messages sent by users about a rental."""

from sqlalchemy.ext.asyncio import AsyncSession

from chatop.core.exceptions import RentalNotFoundError
from chatop.core.logging import get_logger
from chatop.domain.services.authorization import require_sender
from chatop.infrastructure.auth.token_types import AuthenticatedUser
from chatop.infrastructure.persistence.models import MessageModel
from chatop.infrastructure.persistence.repositories import (
    MessageRepository,
    RentalRepository,
)

logger = get_logger(__name__)


class MessageService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.messages = MessageRepository(session)
        self.rentals = RentalRepository(session)

    async def send_message(
        self,
        text: str,
        user_id: int,
        rental_id: int,
        identity: AuthenticatedUser,
    ) -> MessageModel:
        """Store a message from the caller about a rental.

        Args:
            text: Message body.
            user_id: Sender declared in the request; must be the caller.
            rental_id: Rental the message is about.
            identity: The authenticated caller.

        Raises:
            UnauthorizedError: If the declared sender is not the caller.
            RentalNotFoundError: If the rental does not exist.
        """
        require_sender(user_id, identity)

        if await self.rentals.get_by_id(rental_id) is None:
            raise RentalNotFoundError(rental_id)

        message = await self.messages.create(
            MessageModel(message=text, user_id=identity.id, rental_id=rental_id)
        )
        await self.session.commit()

        logger.info("Message sent", message_id=message.id, rental_id=rental_id)
        return message
