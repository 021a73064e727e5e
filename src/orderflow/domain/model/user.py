"""User entity: the customer who places orders."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from orderflow.domain.exceptions import ValidationError
from orderflow.domain.model.value_objects import Email

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100


@dataclass(frozen=True)
class User:
    id: str
    email: Email
    name: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationError("User ID is required")
        if not isinstance(self.email, Email):
            raise ValidationError("User email is required")
        name = (self.name or "").strip()
        if not name:
            raise ValidationError("User name is required")
        if len(name) < MIN_NAME_LENGTH:
            raise ValidationError(
                f"User name must be at least {MIN_NAME_LENGTH} characters long"
            )
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"User name must not exceed {MAX_NAME_LENGTH} characters"
            )

    @staticmethod
    def create(email: Email, name: str) -> User:
        return User(id=str(uuid.uuid4()), email=email, name=name.strip())
