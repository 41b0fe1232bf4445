"""
HTTP email client adapter - Implements EmailSender protocol.

Delivers email through a Postmark-compatible REST API:

    POST {base_url}/email
    X-Postmark-Server-Token: <authorization token>
    {"From": ..., "To": ..., "Subject": ..., "HtmlBody": ..., "TextBody": ...}

A single httpx.Client is shared across requests. Failures are not retried;
they surface as EmailDeliveryError.
"""

import logging

import httpx
from pydantic import SecretStr

from src.domain.exceptions import EmailDeliveryError
from src.domain.subscriber import SubscriberEmail

logger = logging.getLogger(__name__)


class HttpEmailClient:
    """Implements EmailSender protocol via an HTTP email API."""

    def __init__(
        self,
        base_url: str,
        sender: SubscriberEmail,
        authorization_token: SecretStr,
        timeout_seconds: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: API root, e.g. https://api.postmarkapp.com
            sender: Validated From address
            authorization_token: Server token sent in X-Postmark-Server-Token
            timeout_seconds: Per-request timeout
            client: Preconfigured httpx.Client (tests pass one with a MockTransport)
        """
        self._base_url = base_url.rstrip("/")
        self._sender = sender
        self._authorization_token = authorization_token
        self._client = client if client is not None else httpx.Client(timeout=timeout_seconds)

    def send_email(
        self, recipient: SubscriberEmail, subject: str, plain_body: str, html_body: str
    ) -> None:
        """
        Send one email through the API.

        Raises:
            EmailDeliveryError: On transport errors or a non-2xx response
        """
        payload = {
            "From": self._sender.value,
            "To": recipient.value,
            "Subject": subject,
            "HtmlBody": html_body,
            "TextBody": plain_body,
        }
        headers = {
            "X-Postmark-Server-Token": self._authorization_token.get_secret_value(),
        }

        try:
            response = self._client.post(f"{self._base_url}/email", json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("Email API rejected message: status %d", e.response.status_code)
            raise EmailDeliveryError(
                f"Email API responded with status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.warning("Email API request failed: %s", e)
            raise EmailDeliveryError("Email API request failed") from e

        logger.info("Email sent: status %d", response.status_code)

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._client.close()
