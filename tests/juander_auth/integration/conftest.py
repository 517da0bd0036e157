"""Pytest fixtures for juander_auth integration tests.

Each test gets its own SQLite database file, so several sessions can see
each other's committed writes the way concurrent requests would.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from juander.infrastructure.persistence.sqlalchemy.models import Base
from juander_auth.persistence.sqlalchemy import AuthBase


@pytest.fixture
async def test_db_engine(tmp_path):
    """Create a file-backed SQLite database with every table."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'juander.db'}",
        echo=False,
        poolclass=NullPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.run_sync(AuthBase.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(test_db_engine):
    return async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def session(session_maker):
    """Create a test database session."""
    async with session_maker() as session:
        yield session
