"""
Subscriber value types - validated name and email wrappers.

Instances are only built through parse(), which either returns a valid
value or raises ValidationError. Nothing here performs I/O.
"""

import unicodedata
from dataclasses import dataclass

import regex
from email_validator import EmailNotValidError, validate_email

from .exceptions import ValidationError

MAX_NAME_LENGTH = 256
FORBIDDEN_NAME_CHARACTERS = frozenset('/()"<>\\{}')


@dataclass(frozen=True)
class SubscriberName:
    """A subscriber's display name, stored exactly as submitted."""

    value: str

    @classmethod
    def parse(cls, raw: str) -> "SubscriberName":
        """
        Validate a submitted name.

        Rules:
        - not empty and not whitespace-only
        - at most 256 grapheme clusters (a base letter plus its combining
          marks counts once)
        - none of / ( ) " < > \\ { }
        - no control characters

        The input is never trimmed.

        Raises:
            ValidationError: If any rule is violated
        """
        if not raw or raw.isspace():
            raise ValidationError("Subscriber name is empty.")
        if len(regex.findall(r"\X", raw)) > MAX_NAME_LENGTH:
            raise ValidationError("Subscriber name is too long.")
        for char in raw:
            if char in FORBIDDEN_NAME_CHARACTERS or unicodedata.category(char) == "Cc":
                raise ValidationError("Subscriber name contains a forbidden character.")
        return cls(raw)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SubscriberEmail:
    """A syntactically valid email address, domain part normalized."""

    value: str

    @classmethod
    def parse(cls, raw: str) -> "SubscriberEmail":
        """
        Validate a submitted email address.

        Syntax is checked with email-validator, without DNS lookups or the
        special-use domain policy, so reserved TLDs such as .test pass. The
        domain must still contain a dot. Leading or trailing whitespace is
        rejected rather than stripped.

        Raises:
            ValidationError: If the address is not valid
        """
        if not raw or raw != raw.strip():
            raise ValidationError("Subscriber email is empty or padded with whitespace.")
        try:
            validated = validate_email(raw, check_deliverability=False, globally_deliverable=False)
        except EmailNotValidError as e:
            raise ValidationError(f"Invalid subscriber email: {e}") from e
        if "." not in validated.ascii_domain:
            raise ValidationError("Invalid subscriber email: the domain has no period.")
        return cls(validated.normalized)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NewSubscriber:
    """Validated form submission, ready to be persisted."""

    name: SubscriberName
    email: SubscriberEmail

    @classmethod
    def parse(cls, name: str, email: str) -> "NewSubscriber":
        """Validate both fields; the name is checked first."""
        return cls(name=SubscriberName.parse(name), email=SubscriberEmail.parse(email))
