"""Product aggregate.

Products live independently of invoices. They have their own lifecycle:
prices change, products are added and removed from the catalog.
Invoices only look a product up while their total is being computed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from billing.domain.exceptions import ValidationError
from billing.domain.model.value_objects import Money, normalize_id

NAME_MIN_LEN = 2


@dataclass(frozen=True)
class Product:
    """A product in the catalog.

    Use ``Product.create()`` for anything coming from outside; the plain
    constructor trusts its arguments.
    """

    id: int | None
    name: str
    price: float

    @staticmethod
    def create(name: Any, price: Any, id: Any = None) -> Product:
        """Validate and normalize raw input into a Product."""
        name_str = str(name if name is not None else "").strip()
        if len(name_str) < NAME_MIN_LEN:
            raise ValidationError(
                f"Product name too short (minimum {NAME_MIN_LEN} characters)"
            )
        try:
            price_value = Money.of(price).rounded().to_float()
        except ValidationError as exc:
            raise ValidationError(
                f"Invalid price {price!r} (use a number >= 0)"
            ) from exc
        return Product(id=normalize_id(id), name=name_str, price=price_value)

    def with_changes(self, name: Any = None, price: Any = None) -> Product:
        """Return a re-validated copy; ``None`` keeps the current value."""
        return Product.create(
            id=self.id,
            name=self.name if name is None else name,
            price=self.price if price is None else price,
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def from_plain(raw: Mapping[str, Any]) -> Product:
        return Product.create(id=raw.get("id"), name=raw.get("name"), price=raw.get("price"))

    def to_plain(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "price": self.price}
