"""PostgreSQL connection pool for the users table (asyncpg)."""

from __future__ import annotations

import logging

import asyncpg

logger = logging.getLogger(__name__)

USERS_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id            SERIAL PRIMARY KEY,
    name          VARCHAR(120) NOT NULL,
    email         VARCHAR(180) NOT NULL UNIQUE,
    password_hash VARCHAR(255) NOT NULL,
    created_at    TIMESTAMPTZ  NOT NULL DEFAULT NOW()
)
"""


async def open_postgres_pool(dsn: str, timeout: float = 5.0) -> asyncpg.Pool:
    """Connect a small pool and create the users table if it is missing."""
    pool = await asyncpg.create_pool(
        dsn,
        min_size=1,
        max_size=5,
        timeout=timeout,
        command_timeout=60,
    )
    try:
        async with pool.acquire() as conn:
            await conn.execute(USERS_SCHEMA)
    except Exception:
        await pool.close()
        raise
    logger.debug("PostgreSQL users table ready")
    return pool
