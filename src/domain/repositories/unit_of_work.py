"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.group_repository import IGroupRepository
from domain.repositories.user_repository import IUserRepository


class IUnitOfWork(Protocol):
    """One transaction spanning the user and group repositories.

    Writes made through ``users`` and ``groups`` become visible together on
    ``commit``; leaving the context with an exception rolls all of them back.
    """

    users: IUserRepository
    groups: IGroupRepository

    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        ...
