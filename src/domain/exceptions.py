"""
Domain exceptions - Semantic error types for subscriptions.

Two tiers reach the HTTP boundary:
- ValidationError: the request itself is malformed (client fault)
- UnexpectedError: storage or email delivery failed (server fault)

Adapters raise StorageError and EmailDeliveryError; the services translate
them into UnexpectedError, keeping the original exception chained as the
cause for diagnostics.
"""


class SubscriptionError(Exception):
    """Base class for subscription domain errors."""

    pass


class ValidationError(SubscriptionError):
    """Name, email or token failed validation."""

    pass


class UnexpectedError(SubscriptionError):
    """Storage or delivery failure, original exception chained as __cause__."""

    @property
    def cause(self) -> BaseException | None:
        """Underlying exception that triggered this error, if any."""
        return self.__cause__


class StorageError(Exception):
    """Raised by repository adapters when the database operation fails."""

    pass


class EmailDeliveryError(Exception):
    """Raised by email adapters when a message could not be delivered."""

    pass
