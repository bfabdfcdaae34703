"""
Authorization predicates.

Every function is total and side-effect free. Callers turn ``False`` into
401 for anonymous principals where authentication is mandatory, and 403 for
authenticated principals lacking permission.
"""

from app.models import Bookmark
from app.services.identity import Principal


def _is_owner(principal: Principal, bookmark: Bookmark) -> bool:
    return principal.is_authenticated and principal.id == bookmark.user_id


def can_read_bookmark(principal: Principal, bookmark: Bookmark) -> bool:
    return bool(bookmark.is_public) or _is_owner(principal, bookmark) or principal.is_admin


def can_write_bookmark(principal: Principal, bookmark: Bookmark) -> bool:
    return _is_owner(principal, bookmark) or principal.is_admin


def can_list_private(principal: Principal) -> bool:
    """Any authenticated user may list their own private bookmarks."""
    return principal.is_authenticated


def can_administer(principal: Principal) -> bool:
    return principal.is_admin
