"""
Confirmation domain service - activates a pending subscription.

The token is the only credential. A malformed token is rejected before any
storage lookup, and an unknown token gets the same REJECTED outcome.
Confirming an already confirmed subscriber succeeds again.
"""

import logging
from dataclasses import dataclass

from .exceptions import StorageError, UnexpectedError, ValidationError
from .ports import ConfirmResult, SubscriberRepository
from .subscription_token import SubscriptionToken

logger = logging.getLogger(__name__)


@dataclass
class ConfirmationService:
    """Domain service resolving a confirmation token to a subscriber."""

    repository: SubscriberRepository

    def confirm(self, token: str) -> ConfirmResult:
        """
        Confirm the subscriber owning this token.

        Args:
            token: Raw subscription_token query parameter

        Returns:
            CONFIRMED, or REJECTED for malformed and unknown tokens

        Raises:
            UnexpectedError: If the lookup or the update fails
        """
        try:
            subscription_token = SubscriptionToken.parse(token)
        except ValidationError:
            return ConfirmResult.REJECTED

        try:
            with self.repository.begin() as tx:
                subscriber_id = self.repository.find_subscriber_id_by_token(
                    tx, subscription_token
                )
                if subscriber_id is None:
                    return ConfirmResult.REJECTED
                self.repository.mark_confirmed(tx, subscriber_id)
        except StorageError as e:
            logger.exception("Failed to confirm subscriber")
            raise UnexpectedError("Failed to confirm subscriber") from e

        logger.info("Confirmed subscriber %s", subscriber_id)
        return ConfirmResult.CONFIRMED
