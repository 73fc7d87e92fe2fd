"""Application service: Add Product use case."""

from __future__ import annotations

from typing import Any

from billing.domain.model.product import Product
from billing.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self, name: Any, price: Any) -> Product:
        """Add a new product to the catalog (the repository assigns the ID)."""
        product = Product.create(name=name, price=price)
        return await self._product_repo.create(product)
