"""Fixtures for PostgreSQL persistence tests.

Re-exports the shared Testcontainers fixtures.
"""

from tests.shared.fixtures.database import (
    async_engine,
    db_session,
    postgres_container,
    session_maker,
)

__all__ = ["async_engine", "db_session", "postgres_container", "session_maker"]
