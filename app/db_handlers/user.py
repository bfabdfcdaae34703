from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.errors import ValidationError
from app.models.user import User
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.user")


class UserDBHandler(BaseDBHandler[User]):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None):
        super().__init__(User, session_factory)

    @check_local_db
    async def get_user_by_username(
        self, username: str, *, db: AsyncSession = None
    ) -> User | None:
        """Get a user by username."""
        try:
            stmt = select(User).filter(User.username == username)
            result = await db.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving user by username '{username}': {e}")
            raise

    @check_local_db
    async def get_user_by_email(
        self, email: str, *, db: AsyncSession = None
    ) -> User | None:
        """Get a user by email address."""
        stmt = select(User).filter(User.email == email)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @check_local_db
    async def create_user(
        self,
        username: str,
        email: str | None,
        password_hash: str | None,
        *,
        db: AsyncSession = None,
    ) -> User:
        """
        Create a user, rejecting duplicate usernames and emails.

        The explicit lookups produce a precise message; the unique indexes
        still catch a concurrent registration that slips between lookup and
        insert, in which case nothing is written.
        """
        if await self.get_user_by_username(username, db=db):
            raise ValidationError("Username already exists", field="username")
        if email and await self.get_user_by_email(email, db=db):
            raise ValidationError("Email already registered", field="email")

        try:
            return await self.create(
                {"username": username, "email": email, "password_hash": password_hash},
                db=db,
            )
        except IntegrityError as e:
            raise ValidationError("Username or email already exists") from e

    @check_local_db
    async def set_admin(
        self, user: User, is_admin: bool, *, db: AsyncSession = None
    ) -> User:
        """Set or clear the admin flag of a user."""
        updated = await self.update(user, {"is_admin": is_admin}, db=db)
        logger.info(f"Admin flag of user {user.id} set to {is_admin}")
        return updated
