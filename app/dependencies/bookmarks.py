from fastapi import Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_app_db
from app.db_handlers.bookmark import BookmarkDBHandler
from app.dependencies.auth import get_principal
from app.errors import ForbiddenError, NotFoundError, UnauthorizedError
from app.models import Bookmark
from app.services.access_policy import can_read_bookmark, can_write_bookmark
from app.services.identity import Principal


async def get_readable_bookmark(
    bookmark_id: int = Path(..., description="The ID of the bookmark to retrieve"),
    db: AsyncSession = Depends(get_app_db),
    principal: Principal = Depends(get_principal),
) -> tuple[Bookmark, str | None]:
    """
    Dependency to get a bookmark and its owner's username, checking that the
    current principal may read it.

    Raises NotFoundError if the bookmark does not exist.
    Raises UnauthorizedError for anonymous callers on a private bookmark.
    Raises ForbiddenError if the user is not authorized.
    """
    row = await BookmarkDBHandler().get_with_owner_name(bookmark_id, db=db)
    if row is None:
        raise NotFoundError("Bookmark not found")

    bookmark, _ = row
    if not can_read_bookmark(principal, bookmark):
        if not principal.is_authenticated:
            raise UnauthorizedError()
        raise ForbiddenError()
    return row


async def get_writable_bookmark(
    bookmark_id: int = Path(..., description="The ID of the bookmark to modify"),
    db: AsyncSession = Depends(get_app_db),
    principal: Principal = Depends(get_principal),
) -> Bookmark:
    """
    Dependency to get a bookmark the current principal may modify: its owner
    or an admin.

    Raises UnauthorizedError if the user is not authenticated.
    Raises NotFoundError if the bookmark does not exist (checked before ownership).
    Raises ForbiddenError if the user is neither owner nor admin.
    """
    if not principal.is_authenticated:
        raise UnauthorizedError()

    bookmark = await BookmarkDBHandler().get(bookmark_id, db=db)
    if bookmark is None:
        raise NotFoundError("Bookmark not found")

    if not can_write_bookmark(principal, bookmark):
        raise ForbiddenError()
    return bookmark
