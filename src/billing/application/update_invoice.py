"""Application service: Update Invoice use case.

The total is always recomputed from current product prices, so a price
change since creation is picked up here on purpose.  ``created_at`` is
carried over from the stored invoice and never regenerated.
"""

from __future__ import annotations

from typing import Any

from billing.domain.exceptions import DuplicateError, EntityNotFoundError
from billing.domain.model.invoice import Invoice, parse_line_items
from billing.domain.repository.invoice_repository import InvoiceRepository
from billing.domain.repository.product_repository import ProductRepository
from billing.domain.service.invoice_pricing_service import InvoicePricingService


class UpdateInvoiceHandler:

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._invoice_repo = invoice_repo
        self._product_repo = product_repo

    async def handle(
        self,
        invoice_id: int,
        number: Any = None,
        customer_name: Any = None,
        line_items: Any = None,
    ) -> Invoice:
        """Update an invoice; omitted fields keep their stored values.

        Args:
            invoice_id: The invoice to update.
            number: New number; must not belong to another invoice.
            customer_name: New customer name.
            line_items: New line items. If None, the stored ones are
                re-priced.
        """
        current = await self._invoice_repo.find_by_id(invoice_id)
        if current is None:
            raise EntityNotFoundError(f"Invoice #{invoice_id} not found")

        new_number = current.number if number is None else str(number).strip()
        if new_number != current.number:
            other = await self._invoice_repo.find_by_number(new_number)
            if other is not None and other.id != current.id:
                raise DuplicateError(f"Invoice number '{new_number}' already exists")

        items = current.line_items if line_items is None else parse_line_items(line_items)

        svc = InvoicePricingService(self._product_repo)
        total = await svc.total_for(items)

        # Validate the merged invoice before touching storage
        candidate = current.with_changes(
            number=new_number,
            customer_name=customer_name,
            line_items=items,
            total=total,
        )
        updated = await self._invoice_repo.update(
            invoice_id,
            {
                "number": candidate.number,
                "customer_name": candidate.customer_name,
                "line_items": candidate.line_items,
                "total": candidate.total,
            },
        )
        if updated is None:
            raise EntityNotFoundError(f"Invoice #{invoice_id} not found")
        return updated
