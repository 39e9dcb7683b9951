"""SQLAlchemy model for the users table.

Users are uniquely identified by their lowercase email address.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from chatop.infrastructure.persistence.database import Base, utc_now


class UserModel(Base):
    """SQLAlchemy model for the users table.

    Attributes:
        id: Primary key (auto-increment integer).
        email: User's email address, always stored lowercase (unique).
        password_hash: Argon2 hash of the password.
        name: Display name.
        token_version: Revocation counter. Starts at 1 and is incremented on
            every successful login; tokens carrying another value are rejected.
        created_at: Timestamp when the user was created.
        updated_at: Timestamp of the last mutation, null until then.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Lowercase user email address",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Hashed password (argon2)",
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    token_version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        comment="Current token version; older tokens are revoked",
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

    rentals: Mapped[list["RentalModel"]] = relationship(  # noqa: F821
        "RentalModel",
        back_populates="owner",
    )
    messages: Mapped[list["MessageModel"]] = relationship(  # noqa: F821
        "MessageModel",
        back_populates="sender",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
