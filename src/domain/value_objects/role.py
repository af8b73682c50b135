"""Role value object."""

from enum import Enum

from core.exceptions import ErrorCode, InvalidFieldError


class Role(str, Enum):
    """System-wide user role."""

    ADMIN = "admin"
    USER = "user"

    @classmethod
    def parse(cls, raw: str) -> "Role":
        """Normalize and validate a raw role string."""
        normalized = (raw or "").strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            raise InvalidFieldError(
                "role",
                "role must be either 'admin' or 'user'",
                ErrorCode.INVALID_ROLE,
            ) from None

    @property
    def is_admin(self) -> bool:
        return self is Role.ADMIN

    def __str__(self) -> str:
        return self.value
