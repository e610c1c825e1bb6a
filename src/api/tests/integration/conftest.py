"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance migrated to the
latest revision (``alembic upgrade head``).
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
import os

import pytest
import pytest_asyncio
from pydantic import SecretStr
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from iam.infrastructure.user_repository import UserRepository
from infrastructure.database.engines import create_write_engine
from infrastructure.settings import DatabaseSettings
from notes.infrastructure.note_repository import NoteRepository


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        BILLNOTES_DB_HOST, BILLNOTES_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("BILLNOTES_DB_HOST", "localhost"),
        port=int(os.getenv("BILLNOTES_DB_PORT", "5432")),
        database=os.getenv("BILLNOTES_DB_DATABASE", "billnotes"),
        username=os.getenv("BILLNOTES_DB_USERNAME", "billnotes"),
        password=SecretStr(
            os.getenv("BILLNOTES_DB_PASSWORD", "billnotes_dev_password")
        ),
    )


@pytest_asyncio.fixture
async def session_factory(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Provide a session factory for tests that need several sessions."""
    engine = create_write_engine(integration_db_settings)
    factory = async_sessionmaker(engine, expire_on_commit=False)

    yield factory

    await engine.dispose()


@pytest_asyncio.fixture
async def async_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async session for integration tests."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def clean_tables(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[None, None]:
    """Empty the notes and users tables before and after each test.

    Notes go first because of the RESTRICT foreign key to users.
    """

    async def cleanup() -> None:
        async with session_factory() as session, session.begin():
            await session.execute(text("DELETE FROM notes"))
            await session.execute(text("DELETE FROM users"))

    await cleanup()
    yield
    await cleanup()


@pytest.fixture
def user_repository(async_session: AsyncSession) -> UserRepository:
    """Provide a UserRepository for integration tests."""
    return UserRepository(session=async_session)


@pytest.fixture
def note_repository(async_session: AsyncSession) -> NoteRepository:
    """Provide a NoteRepository for integration tests."""
    return NoteRepository(session=async_session)
