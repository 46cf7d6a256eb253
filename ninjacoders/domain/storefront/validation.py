"""
Input validation rules for the storefront bounded context.

Pure functions. Each raises a domain ValidationError on failure.
"""

import re

from ninjacoders.domain.storefront.errors import InvalidEmailError

# Local part: dot-separated atoms or a quoted string. Domain: an IPv4
# literal in brackets or dot-separated labels ending in a 2+ letter TLD.
VALID_EMAIL_PATTERN = re.compile(
    r"(([^<>()\[\]\\.,;:\s@\"]+(\.[^<>()\[\]\\.,;:\s@\"]+)*)|.(\".+\"))"
    r"@"
    r"((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])"
    r"|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))"
)


def is_valid_email(email: str | None) -> bool:
    """Return True if the whole string is an acceptable email address."""
    if not email:
        return False
    return VALID_EMAIL_PATTERN.fullmatch(email) is not None


def require_valid_email(email: str | None) -> str:
    """Return the email unchanged, or raise InvalidEmailError."""
    if not is_valid_email(email):
        raise InvalidEmailError(email or "")
    return email
