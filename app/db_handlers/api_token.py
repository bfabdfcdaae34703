from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models import ApiToken, User
from app.utils.auth import generate_api_token
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.api_token")


class ApiTokenDBHandler(BaseDBHandler[ApiToken]):
    """Issues, resolves and revokes bearer tokens."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None):
        super().__init__(ApiToken, session_factory)

    @check_local_db
    async def issue(
        self, user_id: int, label: str | None = None, *, db: AsyncSession = None
    ) -> ApiToken:
        """Generate and persist a new token. The returned row carries the raw value."""
        api_token = await self.create(
            {"user_id": user_id, "token": generate_api_token(), "label": label}, db=db
        )
        logger.info(f"Issued API token {api_token.id} for user {user_id}")
        return api_token

    @check_local_db
    async def revoke(
        self, token_id: int, user_id: int | None = None, *, db: AsyncSession = None
    ) -> bool:
        """
        Delete a token. Revoking an unknown id is not an error.

        With ``user_id`` the delete only matches that user's token. Returns
        whether a row was removed.
        """
        stmt = delete(ApiToken).where(ApiToken.id == token_id)
        if user_id is not None:
            stmt = stmt.where(ApiToken.user_id == user_id)
        result = await db.execute(stmt)
        await db.commit()
        removed = result.rowcount > 0
        if removed:
            logger.info(f"Revoked API token {token_id}")
        return removed

    @check_local_db
    async def resolve(self, token_value: str | None, *, db: AsyncSession = None) -> User | None:
        """Return the owner of an exactly matching token, or None."""
        if not token_value:
            return None
        stmt = (
            select(User)
            .join(ApiToken, ApiToken.user_id == User.id)
            .where(ApiToken.token == token_value)
            .limit(1)
        )
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @check_local_db
    async def list_for_user(
        self, user_id: int, *, db: AsyncSession = None
    ) -> list[ApiToken]:
        """All tokens of a user, newest first."""
        return await self.get_multi_by_attributes(
            db=db,
            user_id=user_id,
            order_by=[ApiToken.created_at.desc(), ApiToken.id.desc()],
        )
