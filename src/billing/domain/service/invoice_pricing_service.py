"""Domain service: Invoice Pricing.

Computes an invoice total from the Product aggregate.  It lives in the
domain layer because "total = sum(price * quantity), rounded to cents"
is a core business rule, not just orchestration.

Every line item is resolved before anything is returned, so a missing
product aborts the whole computation and the caller never persists a
partially priced invoice.
"""

from __future__ import annotations

from collections.abc import Sequence

from billing.domain.exceptions import EntityNotFoundError
from billing.domain.model.invoice import InvoiceLineItem
from billing.domain.model.value_objects import Money
from billing.domain.repository.product_repository import ProductRepository


class InvoicePricingService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def total_for(self, line_items: Sequence[InvoiceLineItem]) -> float:
        """Price each line item at the product's *current* price.

        Products are looked up one by one; no snapshot is taken across
        the whole list.
        """
        total = Money.zero()
        for index, item in enumerate(line_items):
            product = await self._product_repo.find_by_id(item.product_id)
            if product is None:
                raise EntityNotFoundError(
                    f"Product id={item.product_id} not found (line_items[{index}])"
                )
            total = total + Money.of(product.price) * item.quantity
        return total.rounded().to_float()
