"""Shared fixtures for unit tests."""

from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock

import pytest

from domain.entities.group import Group
from domain.entities.user import User
from domain.value_objects.email import Email
from domain.value_objects.identifiers import GroupID, UserID
from domain.value_objects.role import Role

FIXED_TIME = datetime(2026, 1, 1, 12, 0, 0)


class FakeUnitOfWork:
    """Fake Unit of Work with user and group repository mocks."""

    def __init__(self) -> None:
        self.users = AsyncMock()
        self.groups = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


def make_user(
    id: str = "u1",
    name: str = "Alice",
    email: str = "alice@example.com",
    role: Role = Role.USER,
    group_ids: list[str] | None = None,
) -> User:
    """Build a persisted-looking user."""
    return User.reconstruct(
        id=UserID(id),
        name=name,
        email=Email(email),
        role=role,
        group_ids=[GroupID(g) for g in group_ids or []],
        created_at=FIXED_TIME,
        updated_at=FIXED_TIME,
    )


def make_group(
    id: str = "g1",
    name: str = "Engineering",
    description: str | None = None,
    member_ids: list[str] | None = None,
) -> Group:
    """Build a persisted-looking group."""
    return Group.reconstruct(
        id=GroupID(id),
        name=name,
        description=description,
        member_ids=[UserID(m) for m in member_ids or []],
        created_at=FIXED_TIME,
        updated_at=FIXED_TIME,
    )


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()
