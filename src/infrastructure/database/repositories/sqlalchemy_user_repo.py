"""SQLAlchemy implementation of User repository."""

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DatabaseError
from domain.entities.user import User
from domain.value_objects.email import Email
from domain.value_objects.identifiers import GroupID, UserID
from domain.value_objects.role import Role
from infrastructure.database.errors import translate_db_errors
from infrastructure.database.models import UserGroupModel, UserModel


class SQLAlchemyUserRepository:
    """SQLAlchemy implementation of IUserRepository.

    Membership lives in ``user_groups``; ``save`` and ``update`` replace the
    user's rows there with ``user.group_ids``.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(self, user: User) -> None:
        """Insert or update a user."""
        async with translate_db_errors("save", "users"):
            await self._session.merge(self._to_model(user))
            await self._session.flush()
            await self._replace_groups(user)

    async def find_by_id(self, id: UserID) -> User | None:
        """Get a user by ID."""
        async with translate_db_errors("find_by_id", "users"):
            stmt = select(UserModel).where(UserModel.id == id.value)
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
            if not model:
                return None
            return self._to_entity(model, await self._group_ids_for(model.id))

    async def find_by_email(self, email: Email) -> User | None:
        """Get a user by normalized email."""
        async with translate_db_errors("find_by_email", "users"):
            stmt = select(UserModel).where(UserModel.email == email.value)
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
            if not model:
                return None
            return self._to_entity(model, await self._group_ids_for(model.id))

    async def find_all(self) -> list[User]:
        """Get all users, newest first."""
        async with translate_db_errors("find_all", "users"):
            stmt = select(UserModel).order_by(UserModel.created_at.desc(), UserModel.id)
            result = await self._session.execute(stmt)
            models = list(result.scalars())
            return [
                self._to_entity(model, await self._group_ids_for(model.id))
                for model in models
            ]

    async def update(self, user: User) -> None:
        """Update an existing user."""
        async with translate_db_errors("update", "users"):
            stmt = (
                update(UserModel)
                .where(UserModel.id == user.id.value)
                .values(
                    name=user.name,
                    email=user.email.value,
                    role=user.role.value,
                    updated_at=user.updated_at,
                )
            )
            result = await self._session.execute(stmt)
            if result.rowcount == 0:
                raise DatabaseError("update", "users", reason=f"user {user.id} not found")
            await self._replace_groups(user)

    async def delete(self, id: UserID) -> None:
        """Delete a user together with its membership rows."""
        async with translate_db_errors("delete", "users"):
            await self._session.execute(
                delete(UserGroupModel).where(UserGroupModel.user_id == id.value)
            )
            result = await self._session.execute(
                delete(UserModel).where(UserModel.id == id.value)
            )
            if result.rowcount == 0:
                raise DatabaseError("delete", "users", reason=f"user {id} not found")

    async def _group_ids_for(self, user_id: str) -> list[GroupID]:
        stmt = (
            select(UserGroupModel.group_id)
            .where(UserGroupModel.user_id == user_id)
            .order_by(UserGroupModel.group_id)
        )
        result = await self._session.execute(stmt)
        return [GroupID(group_id) for group_id in result.scalars()]

    async def _replace_groups(self, user: User) -> None:
        await self._session.execute(
            delete(UserGroupModel).where(UserGroupModel.user_id == user.id.value)
        )
        if user.group_ids:
            await self._session.execute(
                insert(UserGroupModel),
                [
                    {"user_id": user.id.value, "group_id": group_id.value}
                    for group_id in user.group_ids
                ],
            )

    def _to_entity(self, model: UserModel, group_ids: list[GroupID]) -> User:
        """Convert ORM model to domain entity."""
        return User.reconstruct(
            id=UserID(model.id),
            name=model.name,
            email=Email(model.email),
            role=Role(model.role),
            group_ids=group_ids,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: User) -> UserModel:
        """Convert domain entity to ORM model."""
        return UserModel(
            id=entity.id.value,
            name=entity.name,
            email=entity.email.value,
            role=entity.role.value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
