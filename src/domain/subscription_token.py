"""
Subscription token - opaque credential embedded in the confirmation link.

A token is exactly 25 ASCII letters or digits. Validation happens in
__post_init__, so an invalid SubscriptionToken instance cannot exist.
"""

import random
import string
from dataclasses import dataclass

from .exceptions import ValidationError

TOKEN_LENGTH = 25
TOKEN_ALPHABET = string.ascii_letters + string.digits


@dataclass(frozen=True)
class SubscriptionToken:
    """Validated 25-character alphanumeric token."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ValidationError("Token must be a string.")
        if len(self.value) != TOKEN_LENGTH:
            raise ValidationError("Invalid token length.")
        if not all(c in TOKEN_ALPHABET for c in self.value):
            raise ValidationError("Invalid character in token.")

    @classmethod
    def parse(cls, raw: str) -> "SubscriptionToken":
        """
        Parse an untrusted string into a token.

        Raises:
            ValidationError: If the length is not 25 or a character is not
                an ASCII letter or digit
        """
        return cls(raw)

    @classmethod
    def generate(cls, rng: random.Random | None = None) -> "SubscriptionToken":
        """Generate a fresh token, drawing from the OS entropy source by default."""
        return TokenGenerator(rng).generate()

    def __str__(self) -> str:
        return self.value


class TokenGenerator:
    """
    Produces subscription tokens from an explicitly owned random source.

    Defaults to random.SystemRandom (os.urandom). Tests may inject a seeded
    random.Random for deterministic output.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.SystemRandom()

    def generate(self) -> SubscriptionToken:
        value = "".join(self._rng.choice(TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))
        return SubscriptionToken(value)
