"""Application service: Create User use case."""

from __future__ import annotations

from orderflow.application.dto import UserDTO, user_to_dto
from orderflow.domain.exceptions import ConflictError
from orderflow.domain.model.user import User
from orderflow.domain.model.value_objects import Email
from orderflow.domain.repository.user_repository import UserRepository


class CreateUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    async def handle(self, name: str, email: str) -> UserDTO:
        """Register a new user; e-mail addresses are unique."""
        address = Email(email.strip())

        existing = await self._user_repo.find_by_email(address.value)
        if existing is not None:
            raise ConflictError(f"User with email {address.value} already exists")

        user = await self._user_repo.save(User.create(email=address, name=name))
        return user_to_dto(user)
