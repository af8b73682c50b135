"""Opaque identifier value objects."""

from dataclasses import dataclass
from uuid import uuid4

from core.exceptions import ErrorCode, InvalidFieldError


@dataclass(frozen=True, order=True)
class _Identifier:
    value: str

    _label = "id"

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise InvalidFieldError(
                self._label,
                f"{self._label.replace('_', ' ')} cannot be empty",
                ErrorCode.REQUIRED_FIELD_MISSING,
            )

    @classmethod
    def generate(cls):  # type: ignore[no-untyped-def]
        """Create a fresh random identifier."""
        return cls(str(uuid4()))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class UserID(_Identifier):
    """Unique identifier of a User."""

    _label = "user_id"


@dataclass(frozen=True, order=True)
class GroupID(_Identifier):
    """Unique identifier of a Group."""

    _label = "group_id"
