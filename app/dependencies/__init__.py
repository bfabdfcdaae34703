from app.dependencies.auth import (
    get_admin_user,
    get_current_user,
    get_current_user_optional,
    get_principal,
)
from app.dependencies.bookmarks import get_readable_bookmark, get_writable_bookmark

__all__ = [
    "get_principal",
    "get_current_user",
    "get_current_user_optional",
    "get_admin_user",
    "get_readable_bookmark",
    "get_writable_bookmark",
]
