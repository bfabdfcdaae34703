"""
This file contains shared fixtures and configuration for the test suite.

Pytest will automatically discover and use the fixtures defined in this file.

Every test gets its own SQLite database file, so tests never share rows. The
ASGI transport does not run the application lifespan, so the fixtures create
the schema and seed the admin password themselves.
"""

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.db import Database
from app.db_handlers.system_setting import SystemSettingDBHandler
from app.services.admin import seed_admin_password
from tests.helpers import issue_token, login, register

ADMIN_PASSWORD = "master-secret"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        bcrypt_rounds=4,
        admin_default_password=ADMIN_PASSWORD,
        default_page_size=10,
        max_page_size=100,
    )


@pytest_asyncio.fixture
async def database(test_settings: Settings):
    """A freshly initialized database with the admin password seeded."""
    database_ = Database(test_settings.database_url)
    await database_.init_db()
    await seed_admin_password(
        SystemSettingDBHandler(database_.session_factory),
        test_settings.admin_default_password,
        test_settings.bcrypt_rounds,
    )
    yield database_
    await database_.dispose()


@pytest_asyncio.fixture
async def db_session(database: Database):
    async with database.session_factory() as session:
        yield session


@pytest.fixture
def app(test_settings: Settings, database: Database) -> FastAPI:
    """
    Create a new application instance bound to the test database.
    """
    # Import the factory function here to ensure it's fresh for each test.
    from main import create_app

    return create_app(settings=test_settings, database=database)


@pytest_asyncio.fixture
async def client(app: FastAPI):
    """Async HTTP client talking to the app in-process. Keeps cookies between calls."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver"
    ) as c:
        yield c


async def _token_for(client: AsyncClient, username: str) -> str:
    await register(client, username)
    await login(client, username)
    token = await issue_token(client, f"{username}-cli")
    await client.post("/api/auth/logout")
    return token


@pytest_asyncio.fixture
async def alice_token(client: AsyncClient) -> str:
    """A bearer token for user ``alice``. Leaves the client logged out."""
    return await _token_for(client, "alice")


@pytest_asyncio.fixture
async def bob_token(client: AsyncClient) -> str:
    """A bearer token for user ``bob``. Leaves the client logged out."""
    return await _token_for(client, "bob")
