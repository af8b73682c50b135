"""Group service layer with business logic."""

from typing import Callable, List, Optional

import structlog

from core.exceptions import BusinessRuleViolationError, ConflictError
from domain.entities.common import require_name
from domain.entities.group import Group
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.common import FieldCollector, load_group, load_user
from domain.value_objects.identifiers import GroupID, UserID

logger = structlog.get_logger()


class GroupService:
    """Use cases for groups and their members."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, name: str, description: Optional[str] = None) -> Group:
        """Create an empty group."""
        fields = FieldCollector()
        fields.parse("name", lambda v: require_name(v, "group"), name)
        fields.raise_if_invalid()

        async with self._uow_factory() as uow:
            group = Group.create(GroupID.generate(), name, description)
            await uow.groups.save(group)
            await uow.commit()

        logger.info("group_created", group_id=str(group.id))
        return group

    async def get_by_id(self, group_id: str) -> Group:
        """Get a group by ID."""
        fields = FieldCollector()
        gid = fields.parse("id", GroupID, group_id)
        fields.raise_if_invalid()

        async with self._uow_factory() as uow:
            return await load_group(uow, gid)

    async def get_all(self) -> List[Group]:
        """Get all groups."""
        async with self._uow_factory() as uow:
            return await uow.groups.find_all()

    async def get_by_member_id(self, user_id: str) -> List[Group]:
        """Get the groups a user belongs to. The user must exist."""
        fields = FieldCollector()
        uid = fields.parse("user_id", UserID, user_id)
        fields.raise_if_invalid()

        async with self._uow_factory() as uow:
            await load_user(uow, uid)
            return await uow.groups.find_by_member_id(uid)

    async def update(
        self,
        group_id: str,
        name: str,
        description: Optional[str] = None,
    ) -> Group:
        """Replace a group's name and description."""
        fields = FieldCollector()
        gid = fields.parse("id", GroupID, group_id)
        fields.parse("name", lambda v: require_name(v, "group"), name)
        fields.raise_if_invalid()

        async with self._uow_factory() as uow:
            group = await load_group(uow, gid)
            group.update_info(name, description)
            await uow.groups.update(group)
            await uow.commit()
            return group

    async def delete(self, group_id: str) -> None:
        """Delete a group. Its memberships go with it."""
        fields = FieldCollector()
        gid = fields.parse("id", GroupID, group_id)
        fields.raise_if_invalid()

        async with self._uow_factory() as uow:
            await load_group(uow, gid)
            await uow.groups.delete(gid)
            await uow.commit()

        logger.info("group_deleted", group_id=group_id)

    async def add_member(self, group_id: str, user_id: str) -> Group:
        """Add a user to the group, updating both sides of the membership."""
        fields = FieldCollector()
        gid = fields.parse("id", GroupID, group_id)
        uid = fields.parse("user_id", UserID, user_id)
        fields.raise_if_invalid()

        async with self._uow_factory() as uow:
            group = await load_group(uow, gid)
            user = await load_user(uow, uid)

            try:
                group.add_member(uid)
            except BusinessRuleViolationError as exc:
                raise ConflictError("Group", group_id, exc.message) from exc

            try:
                user.join_group(gid)
            except BusinessRuleViolationError as exc:
                logger.debug(
                    "membership_mirror_already_present",
                    user_id=user_id,
                    group_id=group_id,
                    reason=exc.message,
                )

            await uow.groups.update(group)
            await uow.users.update(user)
            await uow.commit()

        logger.info("group_member_added", group_id=group_id, user_id=user_id)
        return group

    async def remove_member(self, group_id: str, user_id: str) -> Group:
        """Remove a user from the group, updating both sides of the membership."""
        fields = FieldCollector()
        gid = fields.parse("id", GroupID, group_id)
        uid = fields.parse("user_id", UserID, user_id)
        fields.raise_if_invalid()

        async with self._uow_factory() as uow:
            group = await load_group(uow, gid)
            user = await load_user(uow, uid)

            try:
                group.remove_member(uid)
            except BusinessRuleViolationError as exc:
                raise ConflictError("Group", group_id, exc.message) from exc

            try:
                user.leave_group(gid)
            except BusinessRuleViolationError as exc:
                logger.debug(
                    "membership_mirror_already_absent",
                    user_id=user_id,
                    group_id=group_id,
                    reason=exc.message,
                )

            await uow.groups.update(group)
            await uow.users.update(user)
            await uow.commit()

        logger.info("group_member_removed", group_id=group_id, user_id=user_id)
        return group
