"""Repository adapters - Database implementations."""

from .postgres import PostgresSubscriberRepository, run_migrations

__all__ = ["PostgresSubscriberRepository", "run_migrations"]
