"""Abstract repository for the User aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from billing.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    async def find_all(self) -> list[User]:
        """Return every user, newest first."""

    @abstractmethod
    async def find_by_id(self, user_id: int) -> User | None:
        """Return a user by its ID, or None if not found."""

    @abstractmethod
    async def find_by_email(self, email: str) -> User | None:
        """Return the user owning a normalized email, or None."""

    @abstractmethod
    async def create(self, user: User) -> User:
        """Persist a new user; raises DuplicateError on a taken email."""

    @abstractmethod
    async def update(self, user_id: int, changes: Mapping[str, Any]) -> User | None:
        """Apply ``name``/``email`` changes; None when the user is missing."""

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        """Remove a user; True iff it existed."""
