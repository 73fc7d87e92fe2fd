"""SQLite-backed implementation of InvoiceRepository.

Statements run synchronously: while one executes, the event loop is
blocked.  The async signatures only keep the contract uniform with the
other backends.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Mapping
from typing import Any

from billing.domain.exceptions import DuplicateError
from billing.domain.model.invoice import Invoice
from billing.domain.repository.invoice_repository import InvoiceRepository

_COLUMNS = "id, number, customer_name, line_items, total, created_at"


class SqliteInvoiceRepository(InvoiceRepository):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # --- InvoiceRepository interface ------------------------------------------

    async def find_all(self) -> list[Invoice]:
        rows = self._conn.execute(
            f"SELECT {_COLUMNS} FROM invoices ORDER BY id DESC"
        ).fetchall()
        return [Invoice.from_row(row) for row in rows]

    async def find_by_id(self, invoice_id: int) -> Invoice | None:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM invoices WHERE id = ?", (invoice_id,)
        ).fetchone()
        return Invoice.from_row(row) if row else None

    async def find_by_number(self, number: str) -> Invoice | None:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM invoices WHERE number = ?", (str(number),)
        ).fetchone()
        return Invoice.from_row(row) if row else None

    async def create(self, invoice: Invoice) -> Invoice:
        try:
            with self._conn:
                cursor = self._conn.execute(
                    "INSERT INTO invoices (number, customer_name, line_items, total, created_at) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (
                        invoice.number,
                        invoice.customer_name,
                        invoice.line_items_json(),
                        invoice.total,
                        invoice.created_at.isoformat(),
                    ),
                )
        except sqlite3.IntegrityError as exc:
            raise DuplicateError(
                f"Invoice number '{invoice.number}' already exists"
            ) from exc
        created = await self.find_by_id(cursor.lastrowid)  # type: ignore[arg-type]
        if created is None:
            raise sqlite3.DatabaseError(f"Invoice row {cursor.lastrowid} missing after insert")
        return created

    async def update(self, invoice_id: int, changes: Mapping[str, Any]) -> Invoice | None:
        current = await self.find_by_id(invoice_id)
        if current is None:
            return None
        updated = current.with_changes(**changes)
        try:
            with self._conn:
                self._conn.execute(
                    "UPDATE invoices SET number = ?, customer_name = ?, line_items = ?, total = ? "
                    "WHERE id = ?",
                    (
                        updated.number,
                        updated.customer_name,
                        updated.line_items_json(),
                        updated.total,
                        invoice_id,
                    ),
                )
        except sqlite3.IntegrityError as exc:
            raise DuplicateError(
                f"Invoice number '{updated.number}' already exists"
            ) from exc
        return await self.find_by_id(invoice_id)

    async def delete(self, invoice_id: int) -> bool:
        with self._conn:
            cursor = self._conn.execute("DELETE FROM invoices WHERE id = ?", (invoice_id,))
        return cursor.rowcount > 0
