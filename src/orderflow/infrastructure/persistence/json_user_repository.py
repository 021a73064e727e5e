"""JSON-file-backed implementation of UserRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from orderflow.domain.exceptions import UserNotFoundError
from orderflow.domain.model.user import User
from orderflow.domain.model.value_objects import Email
from orderflow.domain.repository.user_repository import UserRepository
from orderflow.infrastructure.persistence.json_store import JsonFileStore


class JsonUserRepository(UserRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- UserRepository interface ---------------------------------------------

    async def save(self, user: User) -> User:
        async with self._store.lock:
            records = await self._store.load()
            records = [raw for raw in records if raw["id"] != user.id]
            records.append(self._to_raw(user))
            await self._store.persist(records)
        return user

    async def find_by_id(self, user_id: str) -> User | None:
        for raw in await self._store.load():
            if raw["id"] == user_id:
                return self._to_domain(raw)
        return None

    async def find_by_email(self, email: str) -> User | None:
        for raw in await self._store.load():
            if raw["email"].lower() == email.lower():
                return self._to_domain(raw)
        return None

    async def find_all(self) -> list[User]:
        return [self._to_domain(raw) for raw in await self._store.load()]

    async def exists(self, user_id: str) -> bool:
        return await self.find_by_id(user_id) is not None

    async def delete(self, user_id: str) -> None:
        async with self._store.lock:
            records = await self._store.load()
            remaining = [raw for raw in records if raw["id"] != user_id]
            if len(remaining) == len(records):
                raise UserNotFoundError(f"User with ID {user_id} not found")
            await self._store.persist(remaining)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(user: User) -> dict:
        return {
            "id": user.id,
            "email": user.email.value,
            "name": user.name,
            "created_at": user.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> User:
        return User(
            id=raw["id"],
            email=Email(raw["email"]),
            name=raw["name"],
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
