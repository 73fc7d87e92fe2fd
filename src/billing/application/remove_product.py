"""Application service: Remove Product use case.

Invoices keep their frozen totals; nothing cascades.
"""

from __future__ import annotations

from billing.domain.exceptions import EntityNotFoundError
from billing.domain.repository.product_repository import ProductRepository


class RemoveProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self, product_id: int) -> None:
        if not await self._product_repo.delete(product_id):
            raise EntityNotFoundError(f"Product #{product_id} not found")
