"""Message repository for database operations."""

from sqlalchemy.ext.asyncio import AsyncSession

from chatop.infrastructure.persistence.models import MessageModel


class MessageRepository:
    """Repository for message database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, message: MessageModel) -> MessageModel:
        self.session.add(message)
        await self.session.flush()
        await self.session.refresh(message)
        return message

