"""In-memory InvoiceRepository, used when the SQLite store is unavailable."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from billing.domain.exceptions import DuplicateError
from billing.domain.model.invoice import Invoice
from billing.domain.repository.invoice_repository import InvoiceRepository


class MemoryInvoiceRepository(InvoiceRepository):

    def __init__(self) -> None:
        self._store: dict[int, Invoice] = {}
        self._last_id = 0

    async def find_all(self) -> list[Invoice]:
        return [self._store[iid] for iid in sorted(self._store, reverse=True)]

    async def find_by_id(self, invoice_id: int) -> Invoice | None:
        return self._store.get(invoice_id)

    async def find_by_number(self, number: str) -> Invoice | None:
        for invoice in self._store.values():
            if invoice.number == str(number):
                return invoice
        return None

    async def create(self, invoice: Invoice) -> Invoice:
        if await self.find_by_number(invoice.number) is not None:
            raise DuplicateError(f"Invoice number '{invoice.number}' already exists")
        self._last_id += 1
        created = replace(invoice, id=self._last_id)
        self._store[created.id] = created  # type: ignore[index]
        return created

    async def update(self, invoice_id: int, changes: Mapping[str, Any]) -> Invoice | None:
        current = self._store.get(invoice_id)
        if current is None:
            return None
        updated = current.with_changes(**changes)
        other = await self.find_by_number(updated.number)
        if other is not None and other.id != invoice_id:
            raise DuplicateError(f"Invoice number '{updated.number}' already exists")
        self._store[invoice_id] = updated
        return updated

    async def delete(self, invoice_id: int) -> bool:
        return self._store.pop(invoice_id, None) is not None
