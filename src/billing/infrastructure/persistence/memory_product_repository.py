"""In-memory ProductRepository, the last link of the products fallback chain.

Seeded with the default catalog so the API stays usable without a
writable disk.  Contents are lost when the process exits.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from billing.domain.model.product import Product
from billing.domain.repository.product_repository import ProductRepository


class MemoryProductRepository(ProductRepository):

    def __init__(self, seed: Sequence[Mapping[str, Any]] = ()) -> None:
        self._store: dict[int, Product] = {}
        for raw in seed:
            product = Product.from_plain(raw)
            self._store[product.id] = product  # type: ignore[index]

    async def find_all(self) -> list[Product]:
        return [self._store[pid] for pid in sorted(self._store)]

    async def find_by_id(self, product_id: int) -> Product | None:
        return self._store.get(product_id)

    async def create(self, product: Product) -> Product:
        next_id = max(self._store, default=0) + 1
        created = Product.create(id=next_id, name=product.name, price=product.price)
        self._store[next_id] = created
        return created

    async def update(self, product_id: int, changes: Mapping[str, Any]) -> Product | None:
        current = self._store.get(product_id)
        if current is None:
            return None
        updated = current.with_changes(name=changes.get("name"), price=changes.get("price"))
        self._store[product_id] = updated
        return updated

    async def delete(self, product_id: int) -> bool:
        return self._store.pop(product_id, None) is not None
