"""Helpers shared by the user and group services."""

from typing import Any, Callable, TypeVar

from core.exceptions import (
    FieldError,
    GroupNotFoundError,
    InvalidFieldError,
    UserNotFoundError,
    ValidationFailedError,
)
from domain.entities.group import Group
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from domain.value_objects.identifiers import GroupID, UserID

T = TypeVar("T")


class FieldCollector:
    """Parse several raw inputs, reporting every failing field at once."""

    def __init__(self) -> None:
        self.errors: list[FieldError] = []

    def parse(self, field: str, factory: Callable[[Any], T], raw: Any) -> T:
        try:
            return factory(raw)
        except InvalidFieldError as exc:
            self.errors.append(FieldError(field, exc.message, exc.error_code.value))
            # Callers must call raise_if_invalid() before using the result
            return None  # type: ignore[return-value]

    def raise_if_invalid(self) -> None:
        if self.errors:
            raise ValidationFailedError(self.errors)


async def load_user(uow: IUnitOfWork, user_id: UserID) -> User:
    """Fetch a user or raise UserNotFoundError."""
    user = await uow.users.find_by_id(user_id)
    if user is None:
        raise UserNotFoundError(str(user_id))
    return user


async def load_group(uow: IUnitOfWork, group_id: GroupID) -> Group:
    """Fetch a group or raise GroupNotFoundError."""
    group = await uow.groups.find_by_id(group_id)
    if group is None:
        raise GroupNotFoundError(str(group_id))
    return group
