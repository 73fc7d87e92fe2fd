"""Application service: Show/List Products use cases (queries)."""

from __future__ import annotations

from billing.domain.exceptions import EntityNotFoundError
from billing.domain.model.product import Product
from billing.domain.repository.product_repository import ProductRepository


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self, product_id: int) -> Product:
        product = await self._product_repo.find_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")
        return product


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self) -> list[Product]:
        return await self._product_repo.find_all()
