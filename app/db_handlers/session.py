from __future__ import annotations

from datetime import UTC, datetime, timedelta

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models import Session, User
from app.utils.auth import generate_session_id
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.session")


class SessionDBHandler(BaseDBHandler[Session]):
    """Server-side login sessions keyed by the cookie identifier."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None):
        super().__init__(Session, session_factory)

    @check_local_db
    async def create_session(
        self, user_id: int, ttl: timedelta, *, db: AsyncSession = None
    ) -> Session:
        return await self.create(
            {
                "sid": generate_session_id(),
                "user_id": user_id,
                "expire": datetime.now(UTC) + ttl,
            },
            db=db,
        )

    @check_local_db
    async def get_user_for_session(
        self, sid: str | None, *, db: AsyncSession = None
    ) -> User | None:
        """Return the user of a live session. Expired rows are left in place."""
        if not sid:
            return None
        stmt = (
            select(User)
            .join(Session, Session.user_id == User.id)
            .where(Session.sid == sid, Session.expire > datetime.now(UTC))
        )
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @check_local_db
    async def delete_session(self, sid: str | None, *, db: AsyncSession = None) -> None:
        if not sid:
            return
        await db.execute(delete(Session).where(Session.sid == sid))
        await db.commit()

    @check_local_db
    async def purge_expired(self, *, db: AsyncSession = None) -> int:
        """Delete every expired session and return how many were removed."""
        result = await db.execute(
            delete(Session).where(Session.expire <= datetime.now(UTC))
        )
        await db.commit()
        if result.rowcount:
            logger.info(f"Purged {result.rowcount} expired sessions")
        return result.rowcount
