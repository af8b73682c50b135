"""Helpers shared by the domain entities."""

from datetime import UTC, datetime

from core.exceptions import ErrorCode, InvalidFieldError


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching the DateTime columns."""
    return datetime.now(UTC).replace(tzinfo=None)


def require_name(name: str, entity: str) -> str:
    """Validate an entity display name.

    Raises:
        InvalidFieldError: If the name is empty or only whitespace
    """
    if not name or not name.strip():
        raise InvalidFieldError(
            "name",
            f"{entity} name cannot be empty",
            ErrorCode.REQUIRED_FIELD_MISSING,
        )
    return name
