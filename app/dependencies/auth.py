"""
Authentication dependencies for FastAPI route protection.
"""


from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_app_db
from app.errors import ForbiddenError, UnauthorizedError
from app.models import User
from app.services.access_policy import can_administer
from app.services.identity import Principal, resolve_principal


async def get_principal(
    request: Request,
    db: AsyncSession = Depends(get_app_db),
) -> Principal:
    """
    Resolve the request's principal from its bearer token or session cookie.
    Never fails; unauthenticated requests get the anonymous principal.
    """
    cookie_name = request.app.state.settings.session_cookie_name
    return await resolve_principal(
        request.headers.get("Authorization"),
        request.cookies.get(cookie_name),
        db=db,
    )


async def get_current_user(
    principal: Principal = Depends(get_principal),
) -> User:
    """Dependency for routes that require an authenticated user."""
    if not principal.is_authenticated:
        raise UnauthorizedError()
    return principal.user


async def get_current_user_optional(
    principal: Principal = Depends(get_principal),
) -> User | None:
    return principal.user


async def get_admin_user(
    principal: Principal = Depends(get_principal),
) -> User:
    """401 for anonymous callers, 403 for authenticated non-admins."""
    if not principal.is_authenticated:
        raise UnauthorizedError()
    if not can_administer(principal):
        raise ForbiddenError()
    return principal.user
