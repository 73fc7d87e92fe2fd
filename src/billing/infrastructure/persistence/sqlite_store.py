"""Embedded SQLite store shared by invoices (and users as a fallback).

The connection is opened once at startup and owned by the process; the
repositories built on top of it run their statements synchronously.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

INVOICES_SCHEMA = """
CREATE TABLE IF NOT EXISTS invoices (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    number        TEXT    NOT NULL UNIQUE,
    customer_name TEXT    NOT NULL,
    line_items    TEXT    NOT NULL,
    total         REAL    NOT NULL,
    created_at    TEXT    NOT NULL
)
"""


def open_sqlite(path: Path) -> sqlite3.Connection:
    """Open (creating if needed) the database at *path* and its invoices table.

    Raises ``sqlite3.Error`` or ``OSError`` when the location is unusable.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    try:
        conn.row_factory = sqlite3.Row
        with conn:
            conn.execute(INVOICES_SCHEMA)
    except sqlite3.Error:
        conn.close()
        raise
    logger.debug("SQLite store ready at %s", path)
    return conn
