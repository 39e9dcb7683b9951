"""SQLAlchemy model for the messages table."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chatop.infrastructure.persistence.database import Base, utc_now


class MessageModel(Base):
    """A message sent by a user about a rental."""

    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    message: Mapped[str] = mapped_column(String(500), nullable=False)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
        comment="Sender",
    )
    rental_id: Mapped[int] = mapped_column(
        ForeignKey("rentals.id"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        onupdate=utc_now,
    )

    sender: Mapped["UserModel"] = relationship(  # noqa: F821
        "UserModel",
        back_populates="messages",
    )
    rental: Mapped["RentalModel"] = relationship(  # noqa: F821
        "RentalModel",
        back_populates="messages",
    )

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, user_id={self.user_id}, rental_id={self.rental_id})>"
