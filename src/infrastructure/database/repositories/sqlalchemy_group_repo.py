"""SQLAlchemy implementation of Group repository."""

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DatabaseError
from domain.entities.group import Group
from domain.value_objects.identifiers import GroupID, UserID
from infrastructure.database.errors import translate_db_errors
from infrastructure.database.models import GroupModel, UserGroupModel


class SQLAlchemyGroupRepository:
    """SQLAlchemy implementation of IGroupRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(self, group: Group) -> None:
        """Insert or update a group."""
        async with translate_db_errors("save", "groups"):
            await self._session.merge(self._to_model(group))
            await self._session.flush()
            await self._replace_members(group)

    async def find_by_id(self, id: GroupID) -> Group | None:
        """Get a group by ID."""
        async with translate_db_errors("find_by_id", "groups"):
            stmt = select(GroupModel).where(GroupModel.id == id.value)
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
            if not model:
                return None
            return self._to_entity(model, await self._member_ids_for(model.id))

    async def find_by_member_id(self, user_id: UserID) -> list[Group]:
        """Get every group the user belongs to."""
        async with translate_db_errors("find_by_member_id", "groups"):
            stmt = (
                select(GroupModel)
                .join(UserGroupModel, UserGroupModel.group_id == GroupModel.id)
                .where(UserGroupModel.user_id == user_id.value)
                .order_by(GroupModel.created_at.desc(), GroupModel.id)
            )
            result = await self._session.execute(stmt)
            return await self._to_entities(list(result.scalars()))

    async def find_all(self) -> list[Group]:
        """Get all groups, newest first."""
        async with translate_db_errors("find_all", "groups"):
            stmt = select(GroupModel).order_by(GroupModel.created_at.desc(), GroupModel.id)
            result = await self._session.execute(stmt)
            return await self._to_entities(list(result.scalars()))

    async def update(self, group: Group) -> None:
        """Update an existing group."""
        async with translate_db_errors("update", "groups"):
            stmt = (
                update(GroupModel)
                .where(GroupModel.id == group.id.value)
                .values(
                    name=group.name,
                    description=group.description,
                    updated_at=group.updated_at,
                )
            )
            result = await self._session.execute(stmt)
            if result.rowcount == 0:
                raise DatabaseError("update", "groups", reason=f"group {group.id} not found")
            await self._replace_members(group)

    async def delete(self, id: GroupID) -> None:
        """Delete a group together with its membership rows."""
        async with translate_db_errors("delete", "groups"):
            await self._session.execute(
                delete(UserGroupModel).where(UserGroupModel.group_id == id.value)
            )
            result = await self._session.execute(
                delete(GroupModel).where(GroupModel.id == id.value)
            )
            if result.rowcount == 0:
                raise DatabaseError("delete", "groups", reason=f"group {id} not found")

    async def _member_ids_for(self, group_id: str) -> list[UserID]:
        stmt = (
            select(UserGroupModel.user_id)
            .where(UserGroupModel.group_id == group_id)
            .order_by(UserGroupModel.user_id)
        )
        result = await self._session.execute(stmt)
        return [UserID(user_id) for user_id in result.scalars()]

    async def _replace_members(self, group: Group) -> None:
        await self._session.execute(
            delete(UserGroupModel).where(UserGroupModel.group_id == group.id.value)
        )
        if group.member_ids:
            await self._session.execute(
                insert(UserGroupModel),
                [
                    {"user_id": user_id.value, "group_id": group.id.value}
                    for user_id in group.member_ids
                ],
            )

    async def _to_entities(self, models: list[GroupModel]) -> list[Group]:
        return [
            self._to_entity(model, await self._member_ids_for(model.id))
            for model in models
        ]

    def _to_entity(self, model: GroupModel, member_ids: list[UserID]) -> Group:
        """Convert ORM model to domain entity."""
        return Group.reconstruct(
            id=GroupID(model.id),
            name=model.name,
            description=model.description,
            member_ids=member_ids,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Group) -> GroupModel:
        """Convert domain entity to ORM model."""
        return GroupModel(
            id=entity.id.value,
            name=entity.name,
            description=entity.description,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
