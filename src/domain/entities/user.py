"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime

from core.exceptions import DuplicateMemberError, MemberNotFoundError
from domain.entities.common import require_name, utcnow
from domain.value_objects.email import Email
from domain.value_objects.identifiers import GroupID, UserID
from domain.value_objects.role import Role


@dataclass
class User:
    """Domain entity for a user.

    ``group_ids`` mirrors the user's rows in the ``user_groups`` join table.
    Build new users with :meth:`create` and rows loaded from storage with
    :meth:`reconstruct`; mutate only through the methods below.
    """

    id: UserID
    name: str
    email: Email
    role: Role
    _group_ids: list[GroupID] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(cls, id: UserID, name: str, email: Email, role: Role) -> "User":
        """Create a new user with validated state and fresh timestamps."""
        require_name(name, "user")
        now = utcnow()
        return cls(id=id, name=name, email=email, role=role, created_at=now, updated_at=now)

    @classmethod
    def reconstruct(
        cls,
        id: UserID,
        name: str,
        email: Email,
        role: Role,
        group_ids: list[GroupID] | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        """Rebuild a user from persisted data without re-validating it."""
        return cls(
            id=id,
            name=name,
            email=email,
            role=role,
            _group_ids=list(group_ids or []),
            created_at=created_at,
            updated_at=updated_at,
        )

    @property
    def group_ids(self) -> list[GroupID]:
        """Copy of the groups this user belongs to."""
        return list(self._group_ids)

    def is_member_of(self, group_id: GroupID) -> bool:
        return group_id in self._group_ids

    def update_profile(self, name: str, email: Email) -> None:
        require_name(name, "user")
        self.name = name
        self.email = email
        self.updated_at = utcnow()

    def join_group(self, group_id: GroupID) -> None:
        if group_id in self._group_ids:
            raise DuplicateMemberError("User", "user is already a member of this group")
        self._group_ids.append(group_id)
        self.updated_at = utcnow()

    def leave_group(self, group_id: GroupID) -> None:
        if group_id not in self._group_ids:
            raise MemberNotFoundError("User", "user is not a member of this group")
        self._group_ids.remove(group_id)
        self.updated_at = utcnow()

    def change_role(self, role: Role) -> None:
        self.role = role
        self.updated_at = utcnow()
