"""
Subscription domain service - double opt-in request handling.

Workflow for one submission:

    Received -> Validated -> Reused | Created -> Committed -> Notified -> Done

1. Validate name and email (ValidationError, no storage access).
2. Begin a transaction.
3. Idempotency check: if the email already has a pending subscriber,
   reuse its token instead of inserting a second row.
4. Otherwise insert the subscriber, generate a token and store it.
5. Commit. On any storage failure the transaction rolls back and no
   email is sent.
6. Send the confirmation email, outside the transaction.

If step 6 fails the rows stay committed. Resubmitting the form takes the
reuse path in step 3 and sends the same link again.
"""

import logging
from dataclasses import dataclass, field

from .exceptions import EmailDeliveryError, StorageError, UnexpectedError
from .ports import EmailSender, SubscriberRepository
from .subscriber import NewSubscriber
from .subscription_token import SubscriptionToken, TokenGenerator

logger = logging.getLogger(__name__)

CONFIRMATION_SUBJECT = "Welcome!"


def build_confirmation_link(base_url: str, token: SubscriptionToken) -> str:
    """Build the link a subscriber follows to confirm."""
    return f"{base_url}/subscriptions/confirm?subscription_token={token.value}"


@dataclass
class SubscriptionService:
    """
    Domain service for newsletter subscriptions.

    Orchestrates validation, the insert-or-reuse transaction and the
    confirmation email.
    """

    repository: SubscriberRepository
    email_sender: EmailSender
    base_url: str
    token_generator: TokenGenerator = field(default_factory=TokenGenerator)

    def subscribe(self, name: str, email: str) -> None:
        """
        Register a pending subscription and email the confirmation link.

        Args:
            name: Raw name from the form
            email: Raw email from the form

        Raises:
            ValidationError: If name or email is malformed
            UnexpectedError: If storage or email delivery fails
        """
        new_subscriber = NewSubscriber.parse(name, email)

        try:
            token = self._persist_pending_subscriber(new_subscriber)
        except StorageError as e:
            logger.exception("Failed to store pending subscriber")
            raise UnexpectedError("Failed to store pending subscriber") from e

        try:
            self._send_confirmation_email(new_subscriber, token)
        except EmailDeliveryError as e:
            logger.exception("Failed to send confirmation email")
            raise UnexpectedError("Failed to send confirmation email") from e

    def _persist_pending_subscriber(self, new_subscriber: NewSubscriber) -> SubscriptionToken:
        """Reuse the pending token for this email, or create subscriber and token."""
        with self.repository.begin() as tx:
            token = self.repository.find_pending_token_by_email(tx, new_subscriber.email)
            if token is not None:
                logger.info("Reusing pending subscription token")
                return token

            subscriber_id = self.repository.insert_subscriber(tx, new_subscriber)
            token = self.token_generator.generate()
            self.repository.store_token(tx, subscriber_id, token)
            logger.info("Created pending subscriber %s", subscriber_id)
            return token

    def _send_confirmation_email(
        self, new_subscriber: NewSubscriber, token: SubscriptionToken
    ) -> None:
        confirmation_link = build_confirmation_link(self.base_url, token)
        plain_body = (
            "Welcome to our newsletter!\n"
            f"Visit {confirmation_link} to confirm your subscription."
        )
        html_body = (
            "Welcome to our newsletter!<br/>"
            f'Click <a href="{confirmation_link}">here</a> to confirm your subscription.'
        )
        self.email_sender.send_email(
            new_subscriber.email, CONFIRMATION_SUBJECT, plain_body, html_body
        )
