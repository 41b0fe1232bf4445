"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging confirmation emails for local development.
"""

import logging

from src.domain.subscriber import SubscriberEmail

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - the confirmation link shows up in the logs.
    """

    def send_email(
        self, recipient: SubscriberEmail, subject: str, plain_body: str, html_body: str
    ) -> None:
        """
        Log the email to the console (simulates delivery).

        Only the plain text body is logged; it carries the same link as the
        HTML body. Never fails.
        """
        logger.info("[EMAIL] To: %s Subject: %s Body: %s", recipient, subject, plain_body)
