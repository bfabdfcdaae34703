"""
Identity resolution: turns a request's credentials into a Principal.

Resolution order is fixed:

1. ``Authorization: Bearer <token>``. A token that resolves authenticates the
   request. A Bearer header that does not resolve leaves the request
   anonymous and the session cookie is not consulted.
2. The session cookie, when it names a live session.
3. Otherwise anonymous.

Resolution only reads; it never creates, extends or deletes anything.
"""

from dataclasses import dataclass
from enum import Enum

from sqlalchemy.ext.asyncio import AsyncSession

from app.db_handlers.api_token import ApiTokenDBHandler
from app.db_handlers.session import SessionDBHandler
from app.models import User
from app.utils.auth import extract_bearer_token
from app.utils.logger import setup_logger

logger = setup_logger("identity")


class AuthMode(str, Enum):
    TOKEN = "token"
    SESSION = "session"


@dataclass(frozen=True)
class Principal:
    """The identity behind one request: a user, or anonymous."""

    user: User | None = None
    auth_mode: AuthMode | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def id(self) -> int | None:
        return self.user.id if self.user is not None else None

    @property
    def is_admin(self) -> bool:
        return bool(self.user is not None and self.user.is_admin)


ANONYMOUS = Principal()


async def resolve_principal(
    authorization: str | None,
    session_id: str | None,
    *,
    db: AsyncSession,
) -> Principal:
    """Resolve the principal for a request's Authorization header and session cookie."""
    bearer_token = extract_bearer_token(authorization)
    if bearer_token is not None:
        user = await ApiTokenDBHandler().resolve(bearer_token, db=db)
        if user is None:
            logger.info("Rejected bearer token that does not match any issued token")
            return ANONYMOUS
        return Principal(user=user, auth_mode=AuthMode.TOKEN)

    if session_id:
        user = await SessionDBHandler().get_user_for_session(session_id, db=db)
        if user is not None:
            return Principal(user=user, auth_mode=AuthMode.SESSION)

    return ANONYMOUS
