"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory repository and recording email sender (unit tests)
- Database connection pool and table cleanup (integration/adversarial tests)

Database fixtures skip the requesting test when PostgreSQL is unreachable.
"""

from collections.abc import Generator

import psycopg
import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import run_migrations
from src.config.settings import get_settings
from tests.fakes import InMemorySubscriberRepository, RecordingEmailSender


@pytest.fixture
def memory_repository() -> InMemorySubscriberRepository:
    """Fresh in-memory repository for each test."""
    return InMemorySubscriberRepository()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    """Fresh recording email sender for each test."""
    return RecordingEmailSender()


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool for database tests, with migrations applied."""
    settings = get_settings()
    try:
        with psycopg.connect(settings.database_url, connect_timeout=2):
            pass
    except psycopg.OperationalError:
        pytest.skip("PostgreSQL is not available")

    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=True,
    )
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Empty both tables before the test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM subscription_tokens")
        conn.execute("DELETE FROM subscriptions")
        conn.commit()
    yield
