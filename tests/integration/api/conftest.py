"""Pytest fixtures for API tests.

The app runs against a throwaway SQLite file per test, so these tests need
no Docker and are not marked as integration.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from tollgate.infrastructure.persistence.sqlalchemy.models import Base
from tollgate.presentation.api.app import API_V1_PREFIX, create_app
from tollgate.presentation.api.dependencies import get_db_session
from tollgate_auth import JWTService
from tollgate_config.settings import Settings

TEST_JWT_SECRET = "test-jwt-secret-for-testing-only"


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled and fast hashing."""
    return Settings(
        _env_file=None,
        environment="test",
        jwt_secret_key=SecretStr(TEST_JWT_SECRET),
        password_hash_rounds=4,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        api_cookie_secure=False,  # Allow HTTP in tests
    )


@pytest.fixture
def jwt_service() -> JWTService:
    """A verifier sharing the test app's secret."""
    return JWTService(secret_key=TEST_JWT_SECRET)


def _run(coro) -> None:
    """Run a coroutine in a fresh event loop, apart from TestClient's loop."""
    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(coro)
    finally:
        loop.close()


@pytest.fixture
def sqlite_engine(tmp_path):
    """A file-backed SQLite engine with the schema created."""
    # Import models to register them with Base.metadata
    import tollgate_identity.infrastructure.persistence.sqlalchemy.models  # noqa: F401

    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'tollgate-test.db'}",
        echo=False,
        poolclass=NullPool,
    )

    async def _setup():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    _run(_setup())
    yield engine
    _run(engine.dispose())


@pytest.fixture
def test_client(api_settings, sqlite_engine):
    """Create a test client whose requests use the SQLite test database."""
    app = create_app(settings=api_settings)

    test_session_maker = async_sessionmaker(
        sqlite_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Override the database session dependency
    async def override_get_db_session():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session

    return TestClient(app)


@pytest.fixture
def signup_data() -> dict:
    return {"name": "A", "email": "a@b.com", "password": "secret1"}


@pytest.fixture
def registered_user(test_client, signup_data, api_v1_prefix) -> dict:
    """Sign up a user and return the response body."""
    response = test_client.post(f"{api_v1_prefix}/auth/signup", json=signup_data)
    assert response.status_code == 201, (
        f"Signup failed: {response.status_code} - {response.text}"
    )
    return response.json()
