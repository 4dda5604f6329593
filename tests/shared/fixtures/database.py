"""
Testcontainers-based PostgreSQL fixtures for integration tests.

Provides an ephemeral Postgres instance for the test session. Every test
gets freshly created tables.

Usage:
    from tests.shared.fixtures.database import db_session

    async def test_something(db_session):
        repo = IdentityRepositorySQLAlchemy(db_session)
        await repo.insert(new_identity)
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from testcontainers.postgres import PostgresContainer

from tollgate.infrastructure.persistence.sqlalchemy.models import Base

POSTGRES_IMAGE = "postgres:16-alpine"


@pytest.fixture(scope="session")
def postgres_container():
    """
    Start a PostgreSQL container for the test session.

    The container is automatically cleaned up when the session ends.
    """
    with PostgresContainer(POSTGRES_IMAGE) as postgres:
        yield postgres


@pytest.fixture(scope="session")
def async_engine(postgres_container):
    """Create an async SQLAlchemy engine connected to the test container."""
    connection_url = postgres_container.get_connection_url()
    # Testcontainers may return postgresql+psycopg2:// or postgresql://
    async_url = connection_url.replace(
        "postgresql+psycopg2://", "postgresql+asyncpg://"
    )
    async_url = async_url.replace("postgresql://", "postgresql+asyncpg://")

    return create_async_engine(
        async_url,
        echo=False,
        poolclass=NullPool,  # Avoid connection pool issues in tests
    )


@pytest_asyncio.fixture(scope="function")
async def session_maker(async_engine):
    """
    Recreate all tables and hand out a session factory.

    Tables are dropped again after the test.
    """
    # Import models to register them with Base.metadata
    import tollgate_identity.infrastructure.persistence.sqlalchemy.models  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def db_session(session_maker):
    """Provide an isolated database session for each test."""
    async with session_maker() as session:
        yield session
        await session.rollback()
