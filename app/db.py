import argparse
import asyncio
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import event, inspect, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app import models  # noqa: F401
from app.config import settings
from app.models.base import Base
from app.utils.logger import setup_logger

logger = setup_logger("db")


def normalize_database_url(url: str) -> str:
    """Map plain driver URLs onto their asyncio drivers."""
    if not url:
        raise ValueError("BOOKMARKS_DATABASE_URL environment variable not set")

    if url.startswith("postgresql+asyncpg://") or url.startswith("sqlite+aiosqlite://"):
        return url
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    raise ValueError(f"Unsupported database URL prefix: {url.split('://', 1)[0]}")


def _unicode_lower(value):
    return value.lower() if value is not None else None


def _configure_sqlite_connection(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    # Built-in lower() only folds ASCII, which breaks case-insensitive search
    dbapi_connection.create_function("lower", 1, _unicode_lower)


class Database:
    """
    Owns the async engine and session factory of the application database.

    One instance is built by the process entry point (the FastAPI lifespan or
    the CLI below), handed to whatever needs it, and disposed on shutdown.
    """

    def __init__(self, url: str, *, echo: bool = False):
        self.url = normalize_database_url(url)
        self.is_sqlite = self.url.startswith("sqlite")

        engine_kwargs = {"echo": echo}
        if not self.is_sqlite:
            engine_kwargs.update(
                pool_pre_ping=True,
                pool_size=20,
                max_overflow=30,
                pool_timeout=60,
                pool_recycle=300,
                connect_args={"timeout": 30},
            )

        self.engine = create_async_engine(self.url, **engine_kwargs)
        if self.is_sqlite:
            event.listen(self.engine.sync_engine, "connect", _configure_sqlite_connection)

        self.session_factory = async_sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def init_db(self) -> None:
        """Create all tables that do not exist yet."""
        if not Base.metadata.tables:
            logger.warning(
                "Base.metadata.tables is EMPTY! No tables will be created."
            )
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema initialized.")

    async def reset_db(self) -> None:
        """Drop every table and recreate the schema. Destroys all data."""
        logger.warning("Resetting the application database. THIS IS A DESTRUCTIVE OPERATION.")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await self.init_db()
        logger.info("Application database has been reset and re-initialized.")

    async def list_tables(self) -> list[str]:
        async with self.engine.connect() as conn:
            table_names = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).get_table_names()
            )
        logger.debug(f"Tables in application database: {table_names}")
        return sorted(table_names)

    async def check_connection(self) -> bool:
        """Performs a simple query to check actual DB connectivity."""
        async with self.session_factory() as session:
            try:
                result = await session.execute(text("SELECT 1"))
                if result.scalar_one() == 1:
                    logger.info("Successfully connected to the application database.")
                    return True
                raise RuntimeError("Test query returned an unexpected result.")
            except Exception as e:
                logger.error(f"Failed to execute test query: {e}", exc_info=True)
                raise RuntimeError("Database connectivity check failed.") from e

    async def dispose(self) -> None:
        """Closes database connections."""
        logger.info("Closing database connections.")
        await self.engine.dispose()
        logger.info("Database connections closed.")


# --- Dependency for FastAPI ---
async def get_app_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        yield session


async def _grant_admin(database: Database, username: str) -> None:
    from app.db_handlers.user import UserDBHandler

    user_handler = UserDBHandler(database.session_factory)
    user = await user_handler.get_user_by_username(username)
    if user is None:
        logger.error(f"No user named '{username}'.")
        return
    await user_handler.set_admin(user, True)
    logger.info(f"User '{username}' is now an admin.")


async def _run_cli(args: argparse.Namespace) -> None:
    from app.db_handlers.session import SessionDBHandler

    database = Database(args.database_url)
    try:
        if args.action == "init":
            await database.init_db()
        elif args.action == "reset":
            await database.reset_db()
        elif args.action == "list-tables":
            for table_name in await database.list_tables():
                print(table_name)
        elif args.action == "purge-sessions":
            removed = await SessionDBHandler(database.session_factory).purge_expired()
            logger.info(f"Removed {removed} expired sessions.")
        elif args.action == "grant-admin":
            if not args.username:
                raise SystemExit("grant-admin requires --username")
            await _grant_admin(database, args.username)
    finally:
        await database.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Application Database Initialization Utility"
    )
    parser.add_argument(
        "action",
        choices=["init", "reset", "list-tables", "purge-sessions", "grant-admin"],
        help="'init' to create missing tables, "
        "'reset' to drop and recreate all tables, "
        "'list-tables' to show existing tables, "
        "'purge-sessions' to delete expired login sessions, "
        "'grant-admin' to set the admin flag on --username.",
    )
    parser.add_argument(
        "--database-url",
        type=str,
        default=settings.database_url,
        help="Database URL to act upon. Defaults to BOOKMARKS_DATABASE_URL.",
    )
    parser.add_argument("--username", type=str, default=None)
    args = parser.parse_args()

    if args.action == "reset":
        confirm = input(
            "WARNING: This will delete all data in the application database. Are you sure? (yes/no): "
        )
        if confirm.lower() != "yes":
            logger.info("Application Database reset cancelled by user.")
            raise SystemExit(0)

    asyncio.run(_run_cli(args))
    logger.info("Application Database utility script finished.")
