"""User service layer with business logic."""

from typing import Callable, List

import structlog

from core.exceptions import (
    BusinessRuleViolationError,
    ConflictError,
    EmailAlreadyRegisteredError,
)
from domain.entities.common import require_name
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.common import FieldCollector, load_group, load_user
from domain.value_objects.email import Email
from domain.value_objects.identifiers import GroupID, UserID
from domain.value_objects.role import Role

logger = structlog.get_logger()


class UserService:
    """Use cases for users, their role and their group memberships."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, name: str, email: str, role: str) -> User:
        """Register a new user. The email must not be taken."""
        fields = FieldCollector()
        parsed_email = fields.parse("email", Email, email)
        parsed_role = fields.parse("role", Role.parse, role)
        fields.parse("name", lambda v: require_name(v, "user"), name)
        fields.raise_if_invalid()

        async with self._uow_factory() as uow:
            if await uow.users.find_by_email(parsed_email) is not None:
                raise EmailAlreadyRegisteredError(str(parsed_email))

            user = User.create(UserID.generate(), name, parsed_email, parsed_role)
            await uow.users.save(user)
            await uow.commit()

        logger.info("user_created", user_id=str(user.id), role=user.role.value)
        return user

    async def get_by_id(self, user_id: str) -> User:
        """Get a user by ID."""
        fields = FieldCollector()
        uid = fields.parse("id", UserID, user_id)
        fields.raise_if_invalid()

        async with self._uow_factory() as uow:
            return await load_user(uow, uid)

    async def get_all(self) -> List[User]:
        """Get all users."""
        async with self._uow_factory() as uow:
            return await uow.users.find_all()

    async def update(self, user_id: str, name: str, email: str) -> User:
        """Update a user's name and email.

        Keeping the current email is never a conflict; switching to an email
        held by another user is.
        """
        fields = FieldCollector()
        uid = fields.parse("id", UserID, user_id)
        parsed_email = fields.parse("email", Email, email)
        fields.parse("name", lambda v: require_name(v, "user"), name)
        fields.raise_if_invalid()

        async with self._uow_factory() as uow:
            user = await load_user(uow, uid)

            if user.email != parsed_email:
                existing = await uow.users.find_by_email(parsed_email)
                if existing is not None and existing.id != user.id:
                    raise EmailAlreadyRegisteredError(str(parsed_email))

            user.update_profile(name, parsed_email)
            await uow.users.update(user)
            await uow.commit()
            return user

    async def delete(self, user_id: str) -> None:
        """Delete a user. Its memberships go with it."""
        fields = FieldCollector()
        uid = fields.parse("id", UserID, user_id)
        fields.raise_if_invalid()

        async with self._uow_factory() as uow:
            await load_user(uow, uid)
            await uow.users.delete(uid)
            await uow.commit()

        logger.info("user_deleted", user_id=user_id)

    async def change_role(self, user_id: str, role: str) -> User:
        """Assign a new role to a user."""
        fields = FieldCollector()
        uid = fields.parse("id", UserID, user_id)
        parsed_role = fields.parse("role", Role.parse, role)
        fields.raise_if_invalid()

        async with self._uow_factory() as uow:
            user = await load_user(uow, uid)
            user.change_role(parsed_role)
            await uow.users.update(user)
            await uow.commit()

        logger.info("user_role_changed", user_id=user_id, role=parsed_role.value)
        return user

    async def join_group(self, user_id: str, group_id: str) -> User:
        """Add the user to a group, updating both sides of the membership."""
        fields = FieldCollector()
        uid = fields.parse("id", UserID, user_id)
        gid = fields.parse("group_id", GroupID, group_id)
        fields.raise_if_invalid()

        async with self._uow_factory() as uow:
            user = await load_user(uow, uid)
            group = await load_group(uow, gid)

            try:
                user.join_group(gid)
            except BusinessRuleViolationError as exc:
                raise ConflictError("User", user_id, exc.message) from exc

            # The user side succeeded, so the group already holding the
            # member still ends in the desired state.
            try:
                group.add_member(uid)
            except BusinessRuleViolationError as exc:
                logger.debug(
                    "membership_mirror_already_present",
                    user_id=user_id,
                    group_id=group_id,
                    reason=exc.message,
                )

            await uow.users.update(user)
            await uow.groups.update(group)
            await uow.commit()

        logger.info("user_joined_group", user_id=user_id, group_id=group_id)
        return user

    async def leave_group(self, user_id: str, group_id: str) -> User:
        """Remove the user from a group, updating both sides of the membership."""
        fields = FieldCollector()
        uid = fields.parse("id", UserID, user_id)
        gid = fields.parse("group_id", GroupID, group_id)
        fields.raise_if_invalid()

        async with self._uow_factory() as uow:
            user = await load_user(uow, uid)
            group = await load_group(uow, gid)

            try:
                user.leave_group(gid)
            except BusinessRuleViolationError as exc:
                raise ConflictError("User", user_id, exc.message) from exc

            try:
                group.remove_member(uid)
            except BusinessRuleViolationError as exc:
                logger.debug(
                    "membership_mirror_already_absent",
                    user_id=user_id,
                    group_id=group_id,
                    reason=exc.message,
                )

            await uow.users.update(user)
            await uow.groups.update(group)
            await uow.commit()

        logger.info("user_left_group", user_id=user_id, group_id=group_id)
        return user
