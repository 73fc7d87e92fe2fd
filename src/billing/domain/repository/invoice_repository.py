"""Abstract repository for the Invoice aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from billing.domain.model.invoice import Invoice


class InvoiceRepository(ABC):

    @abstractmethod
    async def find_all(self) -> list[Invoice]:
        """Return every invoice, newest first."""

    @abstractmethod
    async def find_by_id(self, invoice_id: int) -> Invoice | None:
        """Return an invoice by its ID, or None if not found."""

    @abstractmethod
    async def find_by_number(self, number: str) -> Invoice | None:
        """Return the invoice carrying *number*, or None."""

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """Persist a new invoice; raises DuplicateError on a taken number."""

    @abstractmethod
    async def update(self, invoice_id: int, changes: Mapping[str, Any]) -> Invoice | None:
        """Apply field changes; None when the invoice is missing."""

    @abstractmethod
    async def delete(self, invoice_id: int) -> bool:
        """Remove an invoice; True iff it existed."""
