"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Request
from psycopg_pool import ConnectionPool

from src.adapters.mailer.console import ConsoleEmailSender
from src.adapters.mailer.http import HttpEmailClient
from src.adapters.repository.postgres import PostgresSubscriberRepository
from src.config.settings import Settings, get_settings
from src.domain.confirmation import ConfirmationService
from src.domain.ports import EmailSender
from src.domain.subscriber import SubscriberEmail
from src.domain.subscription import SubscriptionService


def build_email_sender(settings: Settings) -> ConsoleEmailSender | HttpEmailClient:
    """
    Create the email sender selected by settings.email_backend.

    Called once at startup; the HTTP client keeps a connection pool open
    until the application shuts down.
    """
    if settings.email_backend == "http":
        return HttpEmailClient(
            base_url=settings.email_api_base_url,
            sender=SubscriberEmail.parse(settings.email_sender_address),
            authorization_token=settings.email_authorization_token,
            timeout_seconds=settings.email_timeout_seconds,
        )
    return ConsoleEmailSender()


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> PostgresSubscriberRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresSubscriberRepository(pool)


def get_email_sender(request: Request) -> EmailSender:
    """Get the email sender created at startup."""
    return request.app.state.email_sender


def get_subscription_service(request: Request) -> SubscriptionService:
    """
    Create subscription service with injected dependencies.

    Wires together the repository, email sender and public base URL.
    """
    return SubscriptionService(
        repository=get_repository(request),
        email_sender=get_email_sender(request),
        base_url=get_settings().application_base_url,
    )


def get_confirmation_service(request: Request) -> ConfirmationService:
    """Create confirmation service backed by the Postgres repository."""
    return ConfirmationService(repository=get_repository(request))
