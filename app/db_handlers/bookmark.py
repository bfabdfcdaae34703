from __future__ import annotations

from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql import Select

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models import Bookmark, User
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.bookmark")


class BookmarkDBHandler(BaseDBHandler[Bookmark]):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None):
        super().__init__(Bookmark, session_factory)

    @staticmethod
    def _apply_filters(
        stmt: Select,
        owner_id: int | None,
        is_public: bool | None,
        search: str | None,
    ) -> Select:
        if owner_id is not None:
            stmt = stmt.where(Bookmark.user_id == owner_id)
        if is_public is not None:
            stmt = stmt.where(Bookmark.is_public.is_(is_public))
        if search:
            # Literal, case-insensitive substring match on any of the three fields
            stmt = stmt.where(
                or_(
                    Bookmark.title.icontains(search, autoescape=True),
                    Bookmark.url.icontains(search, autoescape=True),
                    Bookmark.description.icontains(search, autoescape=True),
                )
            )
        return stmt

    @check_local_db
    async def search_bookmarks(
        self,
        *,
        owner_id: int | None = None,
        is_public: bool | None = None,
        search: str | None = None,
        offset: int = 0,
        limit: int = 10,
        db: AsyncSession = None,
    ) -> tuple[list[tuple[Bookmark, str | None]], int]:
        """
        Return one window of matching bookmarks with their owners' usernames,
        plus the number of matches before pagination.

        Rows are ordered newest first with the id as tie-breaker, so the same
        filter always pages through the same sequence.
        """
        try:
            count_stmt = self._apply_filters(
                select(func.count(Bookmark.id)), owner_id, is_public, search
            )
            total = (await db.execute(count_stmt)).scalar_one()

            items_stmt = self._apply_filters(
                select(Bookmark, User.username).outerjoin(
                    User, Bookmark.user_id == User.id
                ),
                owner_id,
                is_public,
                search,
            )
            items_stmt = (
                items_stmt.order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
                .offset(offset)
                .limit(limit)
            )
            rows = (await db.execute(items_stmt)).all()
            return [(row[0], row[1]) for row in rows], total
        except SQLAlchemyError as e:
            logger.error(
                f"Error listing bookmarks (owner_id={owner_id}, is_public={is_public}): {e}",
                exc_info=True,
            )
            raise

    @check_local_db
    async def get_with_owner_name(
        self, bookmark_id: int, *, db: AsyncSession = None
    ) -> tuple[Bookmark, str | None] | None:
        stmt = (
            select(Bookmark, User.username)
            .outerjoin(User, Bookmark.user_id == User.id)
            .where(Bookmark.id == bookmark_id)
        )
        row = (await db.execute(stmt)).first()
        if row is None:
            return None
        return row[0], row[1]

    @check_local_db
    async def create_bookmark(
        self, user_id: int, data: dict[str, Any], *, db: AsyncSession = None
    ) -> Bookmark:
        bookmark = await self.create({**data, "user_id": user_id}, db=db)
        logger.info(f"User {user_id} created bookmark {bookmark.id}")
        return bookmark
