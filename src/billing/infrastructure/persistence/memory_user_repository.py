"""In-memory UserRepository, used when no database is reachable."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from billing.domain.exceptions import DuplicateError
from billing.domain.model.user import User
from billing.domain.model.value_objects import utc_now
from billing.domain.repository.user_repository import UserRepository


class MemoryUserRepository(UserRepository):

    def __init__(self) -> None:
        self._store: dict[int, User] = {}
        self._last_id = 0

    async def find_all(self) -> list[User]:
        return [self._store[uid] for uid in sorted(self._store, reverse=True)]

    async def find_by_id(self, user_id: int) -> User | None:
        return self._store.get(user_id)

    async def find_by_email(self, email: str) -> User | None:
        wanted = str(email).strip().lower()
        for user in self._store.values():
            if user.email == wanted:
                return user
        return None

    async def create(self, user: User) -> User:
        if await self.find_by_email(user.email) is not None:
            raise DuplicateError("Email already registered")
        self._last_id += 1
        created = replace(user, id=self._last_id, created_at=utc_now())
        self._store[created.id] = created  # type: ignore[index]
        return created

    async def update(self, user_id: int, changes: Mapping[str, Any]) -> User | None:
        current = self._store.get(user_id)
        if current is None:
            return None
        updated = current.with_changes(name=changes.get("name"), email=changes.get("email"))
        owner = await self.find_by_email(updated.email)
        if owner is not None and owner.id != user_id:
            raise DuplicateError("Email already in use by another user")
        self._store[user_id] = updated
        return updated

    async def delete(self, user_id: int) -> bool:
        return self._store.pop(user_id, None) is not None
