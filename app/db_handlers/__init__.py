from app.db_handlers.api_token import ApiTokenDBHandler
from app.db_handlers.base import BaseDBHandler, check_local_db
from app.db_handlers.bookmark import BookmarkDBHandler
from app.db_handlers.session import SessionDBHandler
from app.db_handlers.system_setting import SystemSettingDBHandler
from app.db_handlers.user import UserDBHandler

__all__ = [
    "BaseDBHandler",
    "check_local_db",
    "UserDBHandler",
    "BookmarkDBHandler",
    "ApiTokenDBHandler",
    "SessionDBHandler",
    "SystemSettingDBHandler",
]
