"""Composition root: picks concrete backends and wires collaborators.

Handlers and domain code only see the repository ABCs; this module is
where concrete stores get picked.

Fallback chains, evaluated once at startup:

* products: JSON file -> JSON file under the fallback dir -> memory
* sqlite:   configured file -> file under the fallback dir -> unavailable
* users:    Postgres -> SQLite (if available) -> memory
* invoices: SQLite (if available) -> memory
"""

from __future__ import annotations

import inspect
import logging
import sqlite3
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import timedelta
from functools import partial
from pathlib import Path
from typing import Any

from billing.domain.exceptions import BackendUnavailableError
from billing.domain.repository.invoice_repository import InvoiceRepository
from billing.domain.repository.product_repository import ProductRepository
from billing.domain.repository.user_repository import UserRepository
from billing.infrastructure.backend_resolver import BackendAttempt, Resolution, resolve
from billing.infrastructure.config import Settings
from billing.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from billing.infrastructure.persistence.memory_invoice_repository import (
    MemoryInvoiceRepository,
)
from billing.infrastructure.persistence.memory_product_repository import (
    MemoryProductRepository,
)
from billing.infrastructure.persistence.memory_user_repository import (
    MemoryUserRepository,
)
from billing.infrastructure.persistence.postgres_store import open_postgres_pool
from billing.infrastructure.persistence.postgres_user_repository import (
    PostgresUserRepository,
)
from billing.infrastructure.persistence.sqlite_invoice_repository import (
    SqliteInvoiceRepository,
)
from billing.infrastructure.persistence.sqlite_store import open_sqlite
from billing.infrastructure.persistence.sqlite_user_repository import (
    SqliteUserRepository,
)
from billing.infrastructure.security.passwords import BcryptPasswordHasher
from billing.infrastructure.security.tokens import JwtTokenIssuer

logger = logging.getLogger(__name__)

DEFAULT_PRODUCTS: tuple[dict[str, Any], ...] = (
    {"id": 1, "name": "Blue ballpoint pen", "price": 3.5},
    {"id": 2, "name": "Spiral notebook, 96 sheets", "price": 18.9},
    {"id": 3, "name": "White eraser", "price": 2.2},
    {"id": 4, "name": "HB pencil no. 2", "price": 1.5},
    {"id": 5, "name": "Gouache paint 250ml", "price": 14.9},
    {"id": 6, "name": "A4 paper (500 sheets)", "price": 28.9},
    {"id": 7, "name": "Colored pencils, 24 colors", "price": 34.9},
    {"id": 8, "name": "Correction pen", "price": 8.5},
    {"id": 9, "name": "School backpack", "price": 159.9},
    {"id": 10, "name": "Insulated lunch box", "price": 99.9},
)


@dataclass
class Backends:
    """The repositories chosen at startup and the resources they own."""

    products: Resolution[ProductRepository]
    users: Resolution[UserRepository]
    invoices: Resolution[InvoiceRepository]
    sqlite: Resolution[sqlite3.Connection] | None
    _closers: list[Callable[[], Any]] = field(default_factory=list, repr=False)

    def describe(self) -> dict[str, Any]:
        chosen = {
            "products": self.products,
            "users": self.users,
            "invoices": self.invoices,
        }
        return {
            "backends": {name: res.backend_id for name, res in chosen.items()},
            "sqlite_file": self.sqlite.backend_id if self.sqlite else None,
            "falling_back_to_memory": any(
                res.backend_id == "memory" for res in chosen.values()
            ),
            "failures": {
                name: [list(f) for f in res.failures]
                for name, res in chosen.items()
                if res.failures
            },
        }

    async def close(self) -> None:
        while self._closers:
            result = self._closers.pop()()
            if inspect.isawaitable(result):
                await result


# --- Factories ----------------------------------------------------------------


async def _json_products(path: Path) -> ProductRepository:
    return JsonProductRepository(path, seed=DEFAULT_PRODUCTS)


async def _memory_products() -> ProductRepository:
    return MemoryProductRepository(seed=DEFAULT_PRODUCTS)


async def _sqlite_connection(path: Path, closers: list) -> sqlite3.Connection:
    conn = open_sqlite(path)
    closers.append(conn.close)
    return conn


async def _postgres_users(settings: Settings, closers: list) -> UserRepository:
    if not settings.database_url:
        raise BackendUnavailableError("DATABASE_URL is not configured")
    pool = await open_postgres_pool(settings.database_url, settings.db_connect_timeout)
    closers.append(pool.close)
    return PostgresUserRepository(pool)


async def _sqlite_users(conn: sqlite3.Connection) -> UserRepository:
    return SqliteUserRepository(conn)


async def _sqlite_invoices(conn: sqlite3.Connection) -> InvoiceRepository:
    return SqliteInvoiceRepository(conn)


async def _memory_users() -> UserRepository:
    return MemoryUserRepository()


async def _memory_invoices() -> InvoiceRepository:
    return MemoryInvoiceRepository()


# --- Resolution ---------------------------------------------------------------


async def resolve_backends(settings: Settings) -> Backends:
    """Build one working repository per aggregate. Never raises."""
    closers: list[Callable[[], Any]] = []

    products_fallback = settings.fallback_dir / settings.products_json.name
    products = await resolve(
        "products",
        [
            BackendAttempt(f"json:{settings.products_json}", partial(_json_products, settings.products_json)),
            BackendAttempt(f"json:{products_fallback}", partial(_json_products, products_fallback)),
            BackendAttempt("memory", _memory_products),
        ],
    )

    sqlite_fallback = settings.fallback_dir / settings.sqlite_file.name
    try:
        sqlite: Resolution[sqlite3.Connection] | None = await resolve(
            "sqlite",
            [
                BackendAttempt(f"sqlite:{settings.sqlite_file}", partial(_sqlite_connection, settings.sqlite_file, closers)),
                BackendAttempt(f"sqlite:{sqlite_fallback}", partial(_sqlite_connection, sqlite_fallback, closers)),
            ],
        )
    except BackendUnavailableError as exc:
        logger.warning("%s; invoices and users will not use SQLite", exc)
        sqlite = None

    user_attempts: list[BackendAttempt[UserRepository]] = [
        BackendAttempt("postgres", partial(_postgres_users, settings, closers)),
    ]
    invoice_attempts: list[BackendAttempt[InvoiceRepository]] = []
    if sqlite is not None:
        user_attempts.append(BackendAttempt(sqlite.backend_id, partial(_sqlite_users, sqlite.repository)))
        invoice_attempts.append(BackendAttempt(sqlite.backend_id, partial(_sqlite_invoices, sqlite.repository)))
    user_attempts.append(BackendAttempt("memory", _memory_users))
    invoice_attempts.append(BackendAttempt("memory", _memory_invoices))

    users = await resolve("users", user_attempts)
    invoices = await resolve("invoices", invoice_attempts)

    return Backends(
        products=products,
        users=users,
        invoices=invoices,
        sqlite=sqlite,
        _closers=closers,
    )


@asynccontextmanager
async def open_backends(settings: Settings) -> AsyncIterator[Backends]:
    backends = await resolve_backends(settings)
    try:
        yield backends
    finally:
        await backends.close()


# --- Collaborators ------------------------------------------------------------


def password_hasher(settings: Settings) -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=settings.bcrypt_rounds)


def token_issuer(settings: Settings) -> JwtTokenIssuer:
    return JwtTokenIssuer(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_in=timedelta(minutes=settings.jwt_expires_minutes),
    )
