"""Application service: Create Invoice use case.

Orchestrates the flow between repositories and the domain model.
This is the place that coordinates two aggregates (Product lookup +
Invoice creation) living in different stores.
"""

from __future__ import annotations

from typing import Any

from billing.domain.exceptions import DuplicateError, ValidationError
from billing.domain.model.invoice import Invoice, parse_line_items
from billing.domain.model.value_objects import utc_now
from billing.domain.repository.invoice_repository import InvoiceRepository
from billing.domain.repository.product_repository import ProductRepository
from billing.domain.service.invoice_pricing_service import InvoicePricingService


class CreateInvoiceHandler:

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._invoice_repo = invoice_repo
        self._product_repo = product_repo

    async def handle(self, number: Any, customer_name: Any, line_items: Any) -> Invoice:
        """Create a new invoice.

        Steps:
        1. Reject missing fields and malformed line items.
        2. Reject a number that is already taken.
        3. Price every line item at the current product price.
        4. Stamp ``created_at``, persist and return the stored invoice.

        Nothing is written unless steps 1–3 all succeed.
        """
        if not number or not customer_name or line_items is None:
            raise ValidationError(
                "Invalid invoice data: number, customer_name and line_items are required"
            )
        items = parse_line_items(line_items)
        number_str = str(number).strip()

        if await self._invoice_repo.find_by_number(number_str) is not None:
            raise DuplicateError(f"Invoice number '{number_str}' already exists")

        svc = InvoicePricingService(self._product_repo)
        total = await svc.total_for(items)

        invoice = Invoice.create(
            number=number_str,
            customer_name=customer_name,
            line_items=items,
            total=total,
            created_at=utc_now(),
        )
        return await self._invoice_repo.create(invoice)
