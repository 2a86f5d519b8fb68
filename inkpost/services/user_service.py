"""
Inkpost Backend — User Service
===============================

What:  Registration and credential checks against the users table.
Who:   Called by the /register and /login route handlers.

Error Handling Strategy:
    Business-rule failures raise ValidationError / InvalidCredentialsError.
    A unique-constraint violation on insert (two registrations racing for
    the same username) is reported exactly like the pre-insert check.
    Anything else from the database is wrapped in DatabaseError.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.config import settings
from inkpost.exceptions import DatabaseError, InvalidCredentialsError, ValidationError
from inkpost.models.user import User
from inkpost.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    """Stateless; every call receives the request's session."""

    def validate_credentials(self, username: str, password: str) -> None:
        if len(username) < settings.username_min_length:
            raise ValidationError(
                message=f"username must be at least {settings.username_min_length} characters",
                field="username",
            )
        if len(username) > settings.username_max_length:
            raise ValidationError(
                message=f"username must be at most {settings.username_max_length} characters",
                field="username",
            )
        if not password:
            raise ValidationError(message="password must not be empty", field="password")

    async def get_by_username(self, db: AsyncSession, username: str) -> User | None:
        result = await db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def register(self, db: AsyncSession, username: str, password: str) -> User:
        """
        Create a user with a salted password hash.

        Raises:
            ValidationError: Username too short/long, empty password, or already taken.
            DatabaseError: Any other persistence failure.
        """
        self.validate_credentials(username, password)

        try:
            if await self.get_by_username(db, username) is not None:
                raise ValidationError(message="username already taken", field="username")

            user = User(username=username, hashed_password=hash_password(password))
            db.add(user)
            await db.flush()
        except IntegrityError:
            await db.rollback()
            raise ValidationError(message="username already taken", field="username")
        except SQLAlchemyError as e:
            logger.error("Database error registering %s: %s", username, str(e))
            raise DatabaseError(context={"original_error": type(e).__name__})

        logger.info("User registered: %s (%s)", user.username, user.id)
        return user

    async def authenticate(self, db: AsyncSession, username: str, password: str) -> User:
        """
        Look up a user and check the password.

        Raises:
            InvalidCredentialsError: Unknown username or wrong password.
        """
        try:
            user = await self.get_by_username(db, username)
        except SQLAlchemyError as e:
            logger.error("Database error looking up %s: %s", username, str(e))
            raise DatabaseError(context={"original_error": type(e).__name__})

        if user is None or not verify_password(password, user.hashed_password):
            logger.info("Failed login for username=%s", username)
            raise InvalidCredentialsError()

        return user


user_service = UserService()
