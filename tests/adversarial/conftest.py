"""
Shared fixtures for adversarial tests.

Provides common test infrastructure for race condition and token guessing
tests. The pool fixture comes from tests/conftest.py.
"""

from collections.abc import Callable, Generator

import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresSubscriberRepository
from src.domain.subscription import SubscriptionService
from tests.fakes import BASE_URL, TOKEN_IN_LINK, RecordingEmailSender

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture
def repository(pool: ConnectionPool) -> PostgresSubscriberRepository:
    """Create repository instance for each test."""
    return PostgresSubscriberRepository(pool)


@pytest.fixture(autouse=True)
def clean_tables(clean_database: None) -> Generator[None, None, None]:
    """Empty both tables before each test."""
    yield


@pytest.fixture
def issue_token(pool: ConnectionPool) -> Callable[[str], str]:
    """Return a helper that subscribes an email and returns the emailed token."""

    def subscribe_and_get_token(email: str) -> str:
        sender = RecordingEmailSender()
        service = SubscriptionService(
            repository=PostgresSubscriberRepository(pool), email_sender=sender, base_url=BASE_URL
        )
        service.subscribe("Attack Target", email)
        return TOKEN_IN_LINK.search(sender.sent[0].plain_body).group(1)

    return subscribe_and_get_token
