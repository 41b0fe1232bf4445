"""
Domain layer - Pure business logic with zero framework imports.

This package contains the double opt-in subscription workflow: value
types, token generation, and the subscribe and confirm services. It
defines its own port interfaces for infrastructure abstraction.
"""

from .confirmation import ConfirmationService
from .exceptions import (
    EmailDeliveryError,
    StorageError,
    SubscriptionError,
    UnexpectedError,
    ValidationError,
)
from .ports import ConfirmResult, EmailSender, SubscriberRepository, SubscriptionStatus
from .subscriber import NewSubscriber, SubscriberEmail, SubscriberName
from .subscription import SubscriptionService
from .subscription_token import SubscriptionToken, TokenGenerator

__all__ = [
    "ConfirmResult",
    "ConfirmationService",
    "EmailDeliveryError",
    "EmailSender",
    "NewSubscriber",
    "StorageError",
    "SubscriberEmail",
    "SubscriberName",
    "SubscriberRepository",
    "SubscriptionError",
    "SubscriptionService",
    "SubscriptionStatus",
    "SubscriptionToken",
    "TokenGenerator",
    "UnexpectedError",
    "ValidationError",
]
