"""
Inkpost Backend — User SQLAlchemy Model
========================================

What:  ORM model representing the `users` table (the credential store).
Who:   Used by UserService for registration/login and by Post for the author link.

Lifecycle:
    Created on registration; never updated or deleted by the API.
"""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from inkpost.database import Base


class User(Base):
    """
    A registered author.

    The password is only ever stored as a salted bcrypt hash; see inkpost.security.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # Unique index: the database is the final arbiter when two registrations race
    username: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        index=True,
        nullable=False,
        comment="Login name, unique across all users",
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash including its salt",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
