"""SQLAlchemy model for the rentals table."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chatop.infrastructure.persistence.database import Base, utc_now


class RentalModel(Base):
    """A rental listing owned by a single user.

    Only the owner may update a listing; see
    ``chatop.domain.services.authorization.require_ownership``.
    """

    __tablename__ = "rentals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    surface: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    price: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)
    picture: Mapped[str] = mapped_column(String(512), nullable=False, comment="Public picture URL")
    description: Mapped[str] = mapped_column(String(1000), nullable=False)
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
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

    owner: Mapped["UserModel"] = relationship(  # noqa: F821
        "UserModel",
        back_populates="rentals",
    )
    messages: Mapped[list["MessageModel"]] = relationship(  # noqa: F821
        "MessageModel",
        back_populates="rental",
    )

    def __repr__(self) -> str:
        return f"<Rental(id={self.id}, name={self.name}, owner_id={self.owner_id})>"
