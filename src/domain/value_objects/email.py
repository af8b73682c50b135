"""Email value object."""

import re
from dataclasses import dataclass

from core.exceptions import ErrorCode, InvalidFieldError

# Simplified pattern: local@domain.tld with a 2+ letter TLD
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")


@dataclass(frozen=True)
class Email:
    """A validated, normalized email address.

    The address is trimmed and lower-cased on construction, so two emails
    that differ only in case or surrounding whitespace compare equal.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise InvalidFieldError("email", "email cannot be empty", ErrorCode.INVALID_EMAIL)

        normalized = self.value.strip().lower()
        if not EMAIL_PATTERN.match(normalized):
            raise InvalidFieldError("email", "invalid email format", ErrorCode.INVALID_EMAIL)

        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
