"""PostgreSQL-backed implementation of UserRepository."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import asyncpg

from billing.domain.exceptions import DuplicateError
from billing.domain.model.user import User
from billing.domain.repository.user_repository import UserRepository

_COLUMNS = "id, name, email, password_hash, created_at"


class PostgresUserRepository(UserRepository):

    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def find_all(self) -> list[User]:
        rows = await self._pool.fetch(f"SELECT {_COLUMNS} FROM users ORDER BY id DESC")
        return [User.from_row(row) for row in rows]

    async def find_by_id(self, user_id: int) -> User | None:
        row = await self._pool.fetchrow(f"SELECT {_COLUMNS} FROM users WHERE id = $1", user_id)
        return User.from_row(row) if row else None

    async def find_by_email(self, email: str) -> User | None:
        row = await self._pool.fetchrow(
            f"SELECT {_COLUMNS} FROM users WHERE email = $1", str(email).strip().lower()
        )
        return User.from_row(row) if row else None

    async def create(self, user: User) -> User:
        try:
            row = await self._pool.fetchrow(
                "INSERT INTO users (name, email, password_hash) VALUES ($1, $2, $3) "
                f"RETURNING {_COLUMNS}",
                user.name,
                user.email,
                user.password_hash,
            )
        except asyncpg.UniqueViolationError as exc:
            raise DuplicateError("Email already registered") from exc
        return User.from_row(row)

    async def update(self, user_id: int, changes: Mapping[str, Any]) -> User | None:
        current = await self.find_by_id(user_id)
        if current is None:
            return None
        updated = current.with_changes(name=changes.get("name"), email=changes.get("email"))
        try:
            row = await self._pool.fetchrow(
                f"UPDATE users SET name = $1, email = $2 WHERE id = $3 RETURNING {_COLUMNS}",
                updated.name,
                updated.email,
                user_id,
            )
        except asyncpg.UniqueViolationError as exc:
            raise DuplicateError("Email already in use by another user") from exc
        return User.from_row(row) if row else None

    async def delete(self, user_id: int) -> bool:
        status = await self._pool.execute("DELETE FROM users WHERE id = $1", user_id)
        # asyncpg returns the command tag, e.g. "DELETE 1"
        return status.split()[-1] != "0"
