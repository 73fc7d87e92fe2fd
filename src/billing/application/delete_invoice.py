"""Application service: Delete Invoice use case."""

from __future__ import annotations

from billing.domain.exceptions import EntityNotFoundError
from billing.domain.repository.invoice_repository import InvoiceRepository


class DeleteInvoiceHandler:

    def __init__(self, invoice_repo: InvoiceRepository) -> None:
        self._invoice_repo = invoice_repo

    async def handle(self, invoice_id: int) -> None:
        if not await self._invoice_repo.delete(invoice_id):
            raise EntityNotFoundError(f"Invoice #{invoice_id} not found")
