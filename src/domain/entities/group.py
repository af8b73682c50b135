"""Group domain entity."""

from dataclasses import dataclass, field
from datetime import datetime

from core.exceptions import DuplicateMemberError, MemberNotFoundError
from domain.entities.common import require_name, utcnow
from domain.value_objects.identifiers import GroupID, UserID


@dataclass
class Group:
    """Domain entity for a group of users."""

    id: GroupID
    name: str
    description: str | None = None
    _member_ids: list[UserID] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(cls, id: GroupID, name: str, description: str | None = None) -> "Group":
        """Create a new, empty group."""
        require_name(name, "group")
        now = utcnow()
        return cls(id=id, name=name, description=description, created_at=now, updated_at=now)

    @classmethod
    def reconstruct(
        cls,
        id: GroupID,
        name: str,
        description: str | None,
        member_ids: list[UserID] | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Group":
        """Rebuild a group from persisted data without re-validating it."""
        return cls(
            id=id,
            name=name,
            description=description,
            _member_ids=list(member_ids or []),
            created_at=created_at,
            updated_at=updated_at,
        )

    @property
    def member_ids(self) -> list[UserID]:
        """Copy of the group's member IDs."""
        return list(self._member_ids)

    def has_member(self, user_id: UserID) -> bool:
        return user_id in self._member_ids

    def update_info(self, name: str, description: str | None) -> None:
        require_name(name, "group")
        self.name = name
        self.description = description
        self.updated_at = utcnow()

    def add_member(self, user_id: UserID) -> None:
        if user_id in self._member_ids:
            raise DuplicateMemberError("Group", "user is already a member of this group")
        self._member_ids.append(user_id)
        self.updated_at = utcnow()

    def remove_member(self, user_id: UserID) -> None:
        if user_id not in self._member_ids:
            raise MemberNotFoundError("Group", "user is not a member of this group")
        self._member_ids.remove(user_id)
        self.updated_at = utcnow()
