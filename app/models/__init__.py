"""
Database models for the bookmark service.

Architecture: User → Bookmarks / ApiTokens / Sessions, plus SystemSetting rows.
"""

from app.models.api_token import ApiToken
from app.models.bookmark import Bookmark
from app.models.session import Session
from app.models.system_setting import ADMIN_PASSWORD_HASH_KEY, SystemSetting
from app.models.user import User

__all__ = [
    # Core business models
    "User",
    "Bookmark",
    # Credentials
    "ApiToken",
    "Session",
    # Configuration
    "SystemSetting",
    "ADMIN_PASSWORD_HASH_KEY",
]
