"""Email sender adapters - Console and HTTP API implementations."""

from .console import ConsoleEmailSender
from .http import HttpEmailClient

__all__ = ["ConsoleEmailSender", "HttpEmailClient"]
