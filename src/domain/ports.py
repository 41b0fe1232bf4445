"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from contextlib import AbstractContextManager
from enum import Enum
from typing import Any, Protocol
from uuid import UUID

from .subscriber import NewSubscriber, SubscriberEmail
from .subscription_token import SubscriptionToken


class SubscriptionStatus(str, Enum):
    """
    Subscriber lifecycle states.

    Single forward transition:
    - PENDING_CONFIRMATION -> CONFIRMED (confirmation link visited)

    Subscribers are never deleted and never move back to pending.
    """

    PENDING_CONFIRMATION = "pending_confirmation"
    CONFIRMED = "confirmed"


class ConfirmResult(Enum):
    """
    Outcome of a confirmation attempt.

    REJECTED covers malformed, unknown and never-issued tokens alike, so
    callers cannot tell which emails are registered.
    """

    CONFIRMED = "confirmed"
    REJECTED = "rejected"


class SubscriberRepository(Protocol):
    """
    Port interface for subscriber and token persistence.

    Every operation except begin() runs on the transaction handle that
    begin() yields. The repository never commits on its own.
    All failures are raised as StorageError.
    """

    def begin(self) -> AbstractContextManager[Any]:
        """
        Open a transaction.

        Leaving the block normally commits; leaving it with an exception
        rolls back. Failing to begin or commit raises StorageError.
        """
        ...

    def find_pending_token_by_email(
        self, tx: Any, email: SubscriberEmail
    ) -> SubscriptionToken | None:
        """
        Return the token of the pending subscriber with this email.

        Returns:
            The token, or None if no subscriber with that email is pending
        """
        ...

    def insert_subscriber(self, tx: Any, new_subscriber: NewSubscriber) -> UUID:
        """
        Insert a subscriber in PENDING_CONFIRMATION state.

        Returns:
            Newly generated subscriber id
        """
        ...

    def store_token(self, tx: Any, subscriber_id: UUID, token: SubscriptionToken) -> None:
        """
        Store a token for an existing subscriber.

        Raises:
            StorageError: If the subscriber does not exist or the token is taken
        """
        ...

    def find_subscriber_id_by_token(self, tx: Any, token: SubscriptionToken) -> UUID | None:
        """Return the id of the subscriber owning this token, or None."""
        ...

    def mark_confirmed(self, tx: Any, subscriber_id: UUID) -> None:
        """Set the subscriber's status to CONFIRMED; a no-op if already confirmed."""
        ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send_email(
        self, recipient: SubscriberEmail, subject: str, plain_body: str, html_body: str
    ) -> None:
        """
        Deliver one email.

        Args:
            recipient: Validated recipient address
            subject: Subject line
            plain_body: text/plain content
            html_body: text/html content

        Raises:
            EmailDeliveryError: If the message could not be delivered
        """
        ...
