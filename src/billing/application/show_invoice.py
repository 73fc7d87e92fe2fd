"""Application service: Show/List Invoices use cases (queries)."""

from __future__ import annotations

from billing.domain.exceptions import EntityNotFoundError
from billing.domain.model.invoice import Invoice
from billing.domain.repository.invoice_repository import InvoiceRepository


class ShowInvoiceHandler:

    def __init__(self, invoice_repo: InvoiceRepository) -> None:
        self._invoice_repo = invoice_repo

    async def handle(self, invoice_id: int) -> Invoice:
        invoice = await self._invoice_repo.find_by_id(invoice_id)
        if invoice is None:
            raise EntityNotFoundError(f"Invoice #{invoice_id} not found")
        return invoice


class ListInvoicesHandler:

    def __init__(self, invoice_repo: InvoiceRepository) -> None:
        self._invoice_repo = invoice_repo

    async def handle(self) -> list[Invoice]:
        return await self._invoice_repo.find_all()
