"""Abstract repository for the User aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderflow.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    async def save(self, user: User) -> User:
        """Persist a new or updated user and return the stored version."""

    @abstractmethod
    async def find_by_id(self, user_id: str) -> User | None:
        """Return a user by its ID, or None if not found."""

    @abstractmethod
    async def find_by_email(self, email: str) -> User | None:
        """Return the user registered with ``email`` (case-insensitive), or None."""

    @abstractmethod
    async def find_all(self) -> list[User]:
        """Return every user."""

    @abstractmethod
    async def exists(self, user_id: str) -> bool:
        """True if a user with this ID is stored."""

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        """Remove a user; raises UserNotFoundError if absent."""
