"""
Bookmark API routes: the public feed, a user's own collection, and CRUD.

Listing rules follow the Bookmark Query Engine: ``isPublic=true`` is the
open public feed, anything else lists the caller's own bookmarks and needs
authentication. Writes require the owner or an admin; a missing bookmark is
reported as 404 before any permission check.
"""

from typing import Literal

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_app_db
from app.db_handlers.bookmark import BookmarkDBHandler
from app.dependencies.auth import get_current_user, get_principal
from app.dependencies.bookmarks import get_readable_bookmark, get_writable_bookmark
from app.errors import ValidationError
from app.models import Bookmark, User
from app.schemas import (
    BookmarkCreate,
    BookmarkListResponse,
    BookmarkResponse,
    BookmarkUpdate,
)
from app.services.bookmark_query import (
    build_list_filter,
    list_bookmarks,
    to_bookmark_response,
)
from app.services.identity import Principal
from app.utils.logger import setup_logger

logger = setup_logger("api.bookmarks")

router = APIRouter(prefix="/api/bookmarks", tags=["Bookmarks"])


@router.get("", response_model=BookmarkListResponse)
async def get_bookmarks(
    request: Request,
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int | None = Query(None, ge=1, description="Items per page"),
    search: str | None = Query(
        None, description="Case-insensitive substring of title, url or description"
    ),
    is_public: Literal["true", "false"] | None = Query(
        None,
        alias="isPublic",
        description="'true' for the public feed, 'false' for your private bookmarks",
    ),
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_app_db),
):
    """List the public feed or the caller's own bookmarks, paginated."""
    settings = request.app.state.settings
    if limit is None:
        limit = settings.default_page_size
    if limit > settings.max_page_size:
        raise ValidationError(
            f"limit must be at most {settings.max_page_size}", field="limit"
        )

    bookmark_filter = build_list_filter(
        principal,
        is_public=None if is_public is None else is_public == "true",
        search=search,
        page=page,
        limit=limit,
    )
    return await list_bookmarks(bookmark_filter, db=db)


@router.post("", response_model=BookmarkResponse, status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    bookmark_in: BookmarkCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_app_db),
):
    """Save a new bookmark owned by the caller."""
    bookmark = await BookmarkDBHandler().create_bookmark(
        current_user.id, bookmark_in.model_dump(), db=db
    )
    return to_bookmark_response(bookmark, current_user.username)


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    bookmark_row: tuple[Bookmark, str | None] = Depends(get_readable_bookmark),
):
    """Fetch a single bookmark the caller is allowed to read."""
    bookmark, username = bookmark_row
    return to_bookmark_response(bookmark, username)


@router.patch("/{bookmark_id}", response_model=BookmarkResponse)
async def update_bookmark(
    bookmark_in: BookmarkUpdate,
    bookmark: Bookmark = Depends(get_writable_bookmark),
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_app_db),
):
    """Apply a partial update to a bookmark owned by the caller (or any, for admins)."""
    update_data = bookmark_in.model_dump(exclude_unset=True)
    handler = BookmarkDBHandler()
    if update_data:
        bookmark = await handler.update(bookmark, update_data, db=db)
        logger.info(f"User {principal.id} updated bookmark {bookmark.id}")

    row = await handler.get_with_owner_name(bookmark.id, db=db)
    return to_bookmark_response(*row)


@router.delete("/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bookmark(
    bookmark: Bookmark = Depends(get_writable_bookmark),
    principal: Principal = Depends(get_principal),
    db: AsyncSession = Depends(get_app_db),
):
    """Delete a bookmark owned by the caller (or any, for admins)."""
    await BookmarkDBHandler().remove(bookmark.id, db=db)
    logger.info(f"User {principal.id} deleted bookmark {bookmark.id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
