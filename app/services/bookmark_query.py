"""
Bookmark Query Engine: paginated, filterable, searchable bookmark listings.

Visibility rules:
    - ``is_public=True`` lists the global public feed; ``owner_id`` may
      narrow it further.
    - Any other listing is scoped to ``owner_id``, which is mandatory. The
      HTTP layer only ever passes the authenticated caller's own id, so
      private bookmarks of other users are never listed.

Pages are windows over a stable ordering (newest first, id as tie-breaker).
Writes that land between two page fetches may shift rows across pages;
there is no snapshot across requests.
"""

import math
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.bookmark import BookmarkDBHandler
from app.errors import UnauthorizedError, ValidationError
from app.models import Bookmark
from app.schemas import BookmarkListResponse, BookmarkResponse
from app.services.access_policy import can_list_private
from app.services.identity import Principal


@dataclass(frozen=True)
class BookmarkFilter:
    owner_id: int | None = None
    is_public: bool | None = None
    search: str | None = None
    page: int = 1
    limit: int = 10

    def __post_init__(self):
        if self.page < 1:
            raise ValidationError("page must be at least 1", field="page")
        if self.limit < 1:
            raise ValidationError("limit must be at least 1", field="limit")
        if self.is_public is not True and self.owner_id is None:
            raise ValidationError(
                "Listing non-public bookmarks requires an owner", field="ownerId"
            )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def total_pages(total: int, limit: int) -> int:
    if total <= 0:
        return 0
    return math.ceil(total / limit)


def build_list_filter(
    principal: Principal,
    *,
    is_public: bool | None,
    search: str | None,
    page: int,
    limit: int,
) -> BookmarkFilter:
    """
    Translate the list endpoint's query parameters into a filter for the
    caller. The public feed is open to everyone; every other listing is the
    caller's own bookmarks and requires authentication.
    """
    # The term is matched literally, spaces included; blank means no search
    if search is not None and not search.strip():
        search = None
    if is_public is True:
        return BookmarkFilter(is_public=True, search=search, page=page, limit=limit)

    if not can_list_private(principal):
        raise UnauthorizedError()
    return BookmarkFilter(
        owner_id=principal.id,
        is_public=is_public,
        search=search,
        page=page,
        limit=limit,
    )


def to_bookmark_response(bookmark: Bookmark, username: str | None) -> BookmarkResponse:
    return BookmarkResponse.model_validate(bookmark).model_copy(
        update={"username": username}
    )


async def list_bookmarks(
    bookmark_filter: BookmarkFilter,
    *,
    db: AsyncSession,
    handler: BookmarkDBHandler | None = None,
) -> BookmarkListResponse:
    handler = handler or BookmarkDBHandler()
    rows, total = await handler.search_bookmarks(
        owner_id=bookmark_filter.owner_id,
        is_public=bookmark_filter.is_public,
        search=bookmark_filter.search,
        offset=bookmark_filter.offset,
        limit=bookmark_filter.limit,
        db=db,
    )
    return BookmarkListResponse(
        items=[to_bookmark_response(bookmark, username) for bookmark, username in rows],
        total=total,
        page=bookmark_filter.page,
        limit=bookmark_filter.limit,
        total_pages=total_pages(total, bookmark_filter.limit),
    )
