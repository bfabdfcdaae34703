"""
Common utilities package for the bookmark service: credential helpers and
logging.
"""

from app.utils.auth import (
    extract_bearer_token,
    generate_api_token,
    generate_session_id,
    get_password_hash,
    verify_password,
)
from app.utils.logger import cleanup_old_logs, setup_logger

__all__ = [
    # Authentication utilities
    "get_password_hash",
    "verify_password",
    "generate_api_token",
    "generate_session_id",
    "extract_bearer_token",
    # Logging utilities
    "setup_logger",
    "cleanup_old_logs",
]
