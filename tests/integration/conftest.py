"""
Shared fixtures for integration tests.

Requires PostgreSQL at DATABASE_URL. When the database cannot be reached
every test that needs it is skipped.
"""

from collections.abc import Generator

import psycopg
import pytest
from psycopg_pool import ConnectionPool

from onboard.adapters.repository.postgres import (
    PostgresIdentityRepository,
    PostgresProfileRepository,
    run_migrations,
)
from onboard.config.settings import get_settings


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Connection pool with both stores migrated."""
    settings = get_settings()
    try:
        with psycopg.connect(settings.database_url, connect_timeout=3):
            pass
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL not available: {e}")

    pool = ConnectionPool(conninfo=settings.database_url, min_size=1, max_size=10, open=True)
    run_migrations(pool, "identity")
    run_migrations(pool, "profiles")
    yield pool
    pool.close()


@pytest.fixture(autouse=True)
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Empty both tables before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM identities")
        conn.execute("DELETE FROM student_profiles")
        conn.commit()
    yield


@pytest.fixture
def identity_repository(pool: ConnectionPool) -> PostgresIdentityRepository:
    return PostgresIdentityRepository(pool)


@pytest.fixture
def profile_repository(pool: ConnectionPool) -> PostgresProfileRepository:
    return PostgresProfileRepository(pool)
