"""Application service: Update Product use case."""

from __future__ import annotations

from typing import Any

from billing.domain.exceptions import EntityNotFoundError
from billing.domain.model.product import Product
from billing.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self, product_id: int, name: Any = None, price: Any = None) -> Product:
        """Change a product's name and/or price.

        This does NOT affect any existing invoices; their totals were
        frozen when they were created or last updated.
        """
        product = await self._product_repo.find_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")

        candidate = product.with_changes(name=name, price=price)
        updated = await self._product_repo.update(
            product_id, {"name": candidate.name, "price": candidate.price}
        )
        if updated is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")
        return updated
