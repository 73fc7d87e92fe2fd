"""SQLite-backed UserRepository, the fallback when Postgres is unreachable.

Shares the invoices database file and creates its own ``users`` table.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Mapping
from typing import Any

from billing.domain.exceptions import DuplicateError
from billing.domain.model.user import User
from billing.domain.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)

USERS_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    name          TEXT NOT NULL,
    email         TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    created_at    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
)
"""

_COLUMNS = "id, name, email, password_hash, created_at"


class SqliteUserRepository(UserRepository):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        with self._conn:
            self._conn.execute(USERS_SCHEMA)
        logger.debug("SQLite users table ready")

    async def find_all(self) -> list[User]:
        rows = self._conn.execute(f"SELECT {_COLUMNS} FROM users ORDER BY id DESC").fetchall()
        return [User.from_row(row) for row in rows]

    async def find_by_id(self, user_id: int) -> User | None:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM users WHERE id = ?", (user_id,)
        ).fetchone()
        return User.from_row(row) if row else None

    async def find_by_email(self, email: str) -> User | None:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM users WHERE email = ?", (str(email).strip().lower(),)
        ).fetchone()
        return User.from_row(row) if row else None

    async def create(self, user: User) -> User:
        try:
            with self._conn:
                cursor = self._conn.execute(
                    "INSERT INTO users (name, email, password_hash) VALUES (?, ?, ?)",
                    (user.name, user.email, user.password_hash),
                )
        except sqlite3.IntegrityError as exc:
            raise DuplicateError("Email already registered") from exc
        created = await self.find_by_id(cursor.lastrowid)  # type: ignore[arg-type]
        if created is None:
            raise sqlite3.DatabaseError(f"User row {cursor.lastrowid} missing after insert")
        return created

    async def update(self, user_id: int, changes: Mapping[str, Any]) -> User | None:
        current = await self.find_by_id(user_id)
        if current is None:
            return None
        updated = current.with_changes(name=changes.get("name"), email=changes.get("email"))
        try:
            with self._conn:
                self._conn.execute(
                    "UPDATE users SET name = ?, email = ? WHERE id = ?",
                    (updated.name, updated.email, user_id),
                )
        except sqlite3.IntegrityError as exc:
            raise DuplicateError("Email already in use by another user") from exc
        return await self.find_by_id(user_id)

    async def delete(self, user_id: int) -> bool:
        with self._conn:
            cursor = self._conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
        return cursor.rowcount > 0
