from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.db_handlers.base import BaseDBHandler, check_local_db
from app.models import SystemSetting
from app.utils.logger import setup_logger

logger = setup_logger("db_handlers.system_setting")


class SystemSettingDBHandler(BaseDBHandler[SystemSetting]):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None):
        super().__init__(SystemSetting, session_factory)

    @check_local_db
    async def get_value(self, key: str, *, db: AsyncSession = None) -> str | None:
        result = await db.execute(
            select(SystemSetting.value).where(SystemSetting.key == key)
        )
        return result.scalar_one_or_none()

    @check_local_db
    async def set_value(self, key: str, value: str, *, db: AsyncSession = None) -> None:
        """Insert or overwrite a setting."""
        setting = await self.get_by_attributes(db=db, key=key)
        if setting is None:
            await self.create({"key": key, "value": value}, db=db)
        else:
            await self.update(setting, {"value": value}, db=db)
        logger.info(f"System setting '{key}' updated")

    @check_local_db
    async def set_if_absent(self, key: str, value: str, *, db: AsyncSession = None) -> bool:
        """
        Store ``value`` only when ``key`` has no row yet. Returns whether it
        was stored. A concurrent insert of the same key counts as present.
        """
        if await self.get_value(key, db=db) is not None:
            return False
        try:
            await self.create({"key": key, "value": value}, db=db)
        except IntegrityError:
            return False
        return True
