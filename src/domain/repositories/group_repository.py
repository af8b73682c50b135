"""Group repository protocol."""

from typing import Protocol

from domain.entities.group import Group
from domain.value_objects.identifiers import GroupID, UserID


class IGroupRepository(Protocol):
    """Repository interface for Group entities."""

    async def save(self, group: Group) -> None:
        """Insert or update a group and replace its member associations."""
        ...

    async def find_by_id(self, id: GroupID) -> Group | None:
        """Get a group by ID, or None when absent."""
        ...

    async def find_by_member_id(self, user_id: UserID) -> list[Group]:
        """Get all groups the user belongs to."""
        ...

    async def find_all(self) -> list[Group]:
        """Get all groups."""
        ...

    async def update(self, group: Group) -> None:
        """Update an existing group. Fails when the group row is absent."""
        ...

    async def delete(self, id: GroupID) -> None:
        """Delete a group and its member associations. Fails when absent."""
        ...
