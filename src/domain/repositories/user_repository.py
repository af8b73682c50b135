"""User repository protocol."""

from typing import Protocol

from domain.entities.user import User
from domain.value_objects.email import Email
from domain.value_objects.identifiers import UserID


class IUserRepository(Protocol):
    """Repository interface for User entities."""

    async def save(self, user: User) -> None:
        """Insert or update a user and replace its group associations."""
        ...

    async def find_by_id(self, id: UserID) -> User | None:
        """Get a user by ID, or None when absent."""
        ...

    async def find_by_email(self, email: Email) -> User | None:
        """Get a user by normalized email, or None when absent."""
        ...

    async def find_all(self) -> list[User]:
        """Get all users."""
        ...

    async def update(self, user: User) -> None:
        """Update an existing user. Fails when the user row is absent."""
        ...

    async def delete(self, id: UserID) -> None:
        """Delete a user and its group associations. Fails when absent."""
        ...
