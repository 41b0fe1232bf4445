"""
PostgreSQL repository adapter - Implements SubscriberRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Transaction Design:
------------------
begin() checks a connection out of the pool and opens a transaction on it.
The connection itself is the transaction handle passed to every other
method, so the idempotency check, the subscriber insert and the token insert
share one transaction. Leaving the block commits; an exception rolls back.

Integrity backstops (see migrations/):
- Partial UNIQUE index on subscriptions(email) WHERE status is pending, so
  two concurrent submissions cannot both insert a pending row.
- FOREIGN KEY subscription_tokens.subscriber_id -> subscriptions.id.
- PRIMARY KEY on subscription_tokens.subscription_token.

Every psycopg error, including pool timeouts and commit failures, is
re-raised as the domain's StorageError with the original chained.
"""

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from uuid import UUID

import psycopg
from psycopg_pool import ConnectionPool

from src.domain.exceptions import StorageError
from src.domain.ports import SubscriptionStatus
from src.domain.subscriber import NewSubscriber, SubscriberEmail
from src.domain.subscription_token import SubscriptionToken

logger = logging.getLogger(__name__)


class PostgresSubscriberRepository:
    """
    Implements SubscriberRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    @contextmanager
    def begin(self) -> Iterator[psycopg.Connection]:
        """
        Open a transaction on a pooled connection.

        Yields:
            The connection, used as the transaction handle

        Raises:
            StorageError: If no connection is available, or commit fails
        """
        try:
            with self._pool.connection() as conn, conn.transaction():
                yield conn
        except psycopg.Error as e:
            logger.error("Transaction failed: %s", e)
            raise StorageError("Transaction failed") from e

    def find_pending_token_by_email(
        self, tx: psycopg.Connection, email: SubscriberEmail
    ) -> SubscriptionToken | None:
        """
        Look up the token of the pending subscriber with this email.

        Args:
            tx: Connection yielded by begin()
            email: Validated subscriber email

        Returns:
            Token of the pending subscriber, or None
        """
        sql = """
            SELECT subscription_tokens.subscription_token
            FROM subscription_tokens
            JOIN subscriptions ON subscriptions.id = subscription_tokens.subscriber_id
            WHERE subscriptions.email = %s
              AND subscriptions.status = %s
        """
        row = self._fetchone(
            tx,
            sql,
            (email.value, SubscriptionStatus.PENDING_CONFIRMATION.value),
            "look up pending subscription token",
        )
        if row is None:
            return None
        return SubscriptionToken(row[0])

    def insert_subscriber(self, tx: psycopg.Connection, new_subscriber: NewSubscriber) -> UUID:
        """
        Insert a pending subscriber.

        The id is generated here; subscribed_at uses database time.

        Args:
            tx: Connection yielded by begin()
            new_subscriber: Validated name and email

        Returns:
            The new subscriber id
        """
        sql = """
            INSERT INTO subscriptions (id, email, name, subscribed_at, status)
            VALUES (%s, %s, %s, NOW(), %s)
        """
        subscriber_id = uuid.uuid4()
        self._execute(
            tx,
            sql,
            (
                subscriber_id,
                new_subscriber.email.value,
                new_subscriber.name.value,
                SubscriptionStatus.PENDING_CONFIRMATION.value,
            ),
            "insert subscriber",
        )
        return subscriber_id

    def store_token(
        self, tx: psycopg.Connection, subscriber_id: UUID, token: SubscriptionToken
    ) -> None:
        """
        Insert a token row referencing an existing subscriber.

        Raises:
            StorageError: On foreign key violation (unknown subscriber) or
                primary key violation (duplicate token)
        """
        sql = """
            INSERT INTO subscription_tokens (subscription_token, subscriber_id)
            VALUES (%s, %s)
        """
        self._execute(tx, sql, (token.value, subscriber_id), "store subscription token")

    def find_subscriber_id_by_token(
        self, tx: psycopg.Connection, token: SubscriptionToken
    ) -> UUID | None:
        """Return the subscriber id for an exact token match, or None."""
        sql = """
            SELECT subscriber_id
            FROM subscription_tokens
            WHERE subscription_token = %s
        """
        row = self._fetchone(tx, sql, (token.value,), "look up subscriber by token")
        if row is None:
            return None
        return row[0]

    def mark_confirmed(self, tx: psycopg.Connection, subscriber_id: UUID) -> None:
        """
        Set the subscriber's status to confirmed.

        Plain UPDATE, so running it on a confirmed subscriber changes nothing.
        """
        sql = """
            UPDATE subscriptions
            SET status = %s
            WHERE id = %s
        """
        self._execute(
            tx,
            sql,
            (SubscriptionStatus.CONFIRMED.value, subscriber_id),
            "mark subscriber as confirmed",
        )

    def _execute(
        self, tx: psycopg.Connection, sql: str, params: tuple, action: str
    ) -> None:
        try:
            with tx.cursor() as cursor:
                cursor.execute(sql, params)
        except psycopg.Error as e:
            logger.error("Failed to %s: %s", action, e)
            raise StorageError(f"Failed to {action}") from e

    def _fetchone(
        self, tx: psycopg.Connection, sql: str, params: tuple, action: str
    ) -> tuple | None:
        try:
            with tx.cursor() as cursor:
                cursor.execute(sql, params)
                return cursor.fetchone()
        except psycopg.Error as e:
            logger.error("Failed to %s: %s", action, e)
            raise StorageError(f"Failed to {action}") from e


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
