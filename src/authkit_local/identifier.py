"""User identifier parsing.

A local user signs in with either an email address or a phone number in
E.164 form (``+<country code><number>``, at most 15 digits).
"""

import re
from dataclasses import dataclass
from enum import Enum

from authkit_core.exceptions import AuthDomainError, DomainErrorCode

# Simple but effective email regex
# Validates: user@domain.tld (minimum requirements)
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

E164_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$")


class IdentifierType(str, Enum):
    EMAIL = "email"
    PHONE = "phone"


@dataclass(frozen=True)
class Identifier:
    """A validated, normalized identifier and its type."""

    value: str
    type: IdentifierType

    def __str__(self) -> str:
        return self.value


def parse_identifier(value: str) -> Identifier:
    """Classify and normalize a raw identifier.

    Phone numbers are tried first, so ``"+4915112345678"`` is a phone
    number even though it contains no ``@``. Emails are lower-cased.

    Parameters
    ----------
    value
        Raw user input

    Returns
    -------
    The normalized identifier

    Raises
    ------
    AuthDomainError
        ``INVALID_IDENTIFIER`` if the value is neither form
    """
    candidate = (value or "").strip()

    if E164_PATTERN.match(candidate):
        return Identifier(candidate, IdentifierType.PHONE)

    email = candidate.lower()
    if EMAIL_PATTERN.match(email):
        return Identifier(email, IdentifierType.EMAIL)

    raise AuthDomainError(
        DomainErrorCode.INVALID_IDENTIFIER,
        f"Identifier must be an email or an E.164 phone number: {value!r}",
    )
