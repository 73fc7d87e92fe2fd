"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON file, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from billing.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    async def find_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    async def find_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    async def create(self, product: Product) -> Product:
        """Persist a new product and return it with its generated ID."""

    @abstractmethod
    async def update(self, product_id: int, changes: Mapping[str, Any]) -> Product | None:
        """Apply ``name``/``price`` changes; None when the product is missing."""

    @abstractmethod
    async def delete(self, product_id: int) -> bool:
        """Remove a product; True iff it existed."""
