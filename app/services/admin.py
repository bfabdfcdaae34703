"""
Admin master password management.

The master password lives as a bcrypt hash in the ``admin_password_hash``
system setting. It is seeded once at startup from configuration and can then
only be changed by an admin who knows the current value.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.db_handlers.system_setting import SystemSettingDBHandler
from app.db_handlers.user import UserDBHandler
from app.errors import UnauthorizedError
from app.models import ADMIN_PASSWORD_HASH_KEY, User
from app.utils.auth import get_password_hash, verify_password
from app.utils.logger import setup_logger

logger = setup_logger("admin_service")


async def seed_admin_password(
    handler: SystemSettingDBHandler, default_password: str, rounds: int | None = None
) -> bool:
    """Store the hash of ``default_password`` unless a master password already exists."""
    if await handler.get_value(ADMIN_PASSWORD_HASH_KEY) is not None:
        return False
    password_hash = await run_in_threadpool(get_password_hash, default_password, rounds)
    seeded = await handler.set_if_absent(ADMIN_PASSWORD_HASH_KEY, password_hash)
    if seeded:
        logger.warning(
            "Admin password seeded from ADMIN_DEFAULT_PASSWORD; change it via /api/admin/password."
        )
    return seeded


async def verify_admin_password(supplied: str, *, db: AsyncSession) -> bool:
    stored = await SystemSettingDBHandler().get_value(ADMIN_PASSWORD_HASH_KEY, db=db)
    if stored is None:
        return False
    return await run_in_threadpool(verify_password, supplied, stored)


async def change_admin_password(
    current_password: str,
    new_password: str,
    *,
    db: AsyncSession,
    rounds: int | None = None,
) -> None:
    """
    Replace the master password. When a master password is stored the
    current one must match; a missing row accepts any current value.
    """
    handler = SystemSettingDBHandler()
    stored = await handler.get_value(ADMIN_PASSWORD_HASH_KEY, db=db)
    if stored is not None and not await run_in_threadpool(
        verify_password, current_password, stored
    ):
        raise UnauthorizedError("Invalid current password")

    new_hash = await run_in_threadpool(get_password_hash, new_password, rounds)
    await handler.set_value(ADMIN_PASSWORD_HASH_KEY, new_hash, db=db)
    logger.info("Admin master password changed")


async def elevate_to_admin(user: User, password: str, *, db: AsyncSession) -> User:
    """Grant the admin flag to ``user`` if ``password`` is the master password."""
    if not await verify_admin_password(password, db=db):
        logger.warning(f"Failed admin login attempt by user {user.id}")
        raise UnauthorizedError("Invalid password")
    if user.is_admin:
        return user
    return await UserDBHandler().set_admin(user, True, db=db)
