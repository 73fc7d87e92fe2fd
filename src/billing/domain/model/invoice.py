"""Invoice aggregate.

An invoice references products by id only. Its ``total`` is computed by
the pricing service when the invoice is created or updated and is then
frozen: later product price changes never touch a stored invoice.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from billing.domain.exceptions import ValidationError
from billing.domain.model.value_objects import (
    Money,
    Quantity,
    normalize_id,
    parse_timestamp,
    positive_int,
)

CUSTOMER_NAME_MIN_LEN = 2


@dataclass(frozen=True)
class InvoiceLineItem:
    """One ``{productId, quantity}`` entry; no price is stored per line."""

    product_id: int
    quantity: int | float

    @staticmethod
    def parse(raw: Any, index: int) -> InvoiceLineItem:
        if isinstance(raw, InvoiceLineItem):
            return raw
        if not isinstance(raw, Mapping):
            raise ValidationError(f"line_items[{index}] must be an object")
        product_id = raw.get("productId", raw.get("product_id"))
        try:
            pid = positive_int(product_id, "productId")
        except ValidationError as exc:
            raise ValidationError(
                f"line_items[{index}].productId is invalid (use an integer > 0)"
            ) from exc
        try:
            qty = Quantity.of(raw.get("quantity"))
        except ValidationError as exc:
            raise ValidationError(
                f"line_items[{index}].quantity is invalid (use a number > 0)"
            ) from exc
        return InvoiceLineItem(product_id=pid, quantity=qty.value)

    def to_plain(self) -> dict[str, Any]:
        return {"productId": self.product_id, "quantity": self.quantity}


def parse_line_items(raw: Any) -> tuple[InvoiceLineItem, ...]:
    """Validate a caller-supplied list of line items, keeping its order."""
    if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Sequence):
        raise ValidationError("line_items must be a list")
    return tuple(InvoiceLineItem.parse(item, idx) for idx, item in enumerate(raw))


@dataclass(frozen=True)
class Invoice:
    """Aggregate root for invoices.

    Use ``Invoice.create()`` for new or changed invoices; it enforces
    all invariants.  The plain constructor trusts its arguments.
    """

    id: int | None
    number: str
    customer_name: str
    line_items: tuple[InvoiceLineItem, ...]
    total: float
    created_at: datetime

    @staticmethod
    def create(
        number: Any,
        customer_name: Any,
        line_items: Any,
        total: Any,
        id: Any = None,
        created_at: Any = None,
    ) -> Invoice:
        number_str = str(number if number is not None else "").strip()
        if not number_str:
            raise ValidationError("Invoice number is required")

        customer = str(customer_name if customer_name is not None else "").strip()
        if len(customer) < CUSTOMER_NAME_MIN_LEN:
            raise ValidationError(
                f"Customer name too short (minimum {CUSTOMER_NAME_MIN_LEN} characters)"
            )

        items = parse_line_items(line_items)

        try:
            rounded_total = Money.of(total).rounded().to_float()
        except ValidationError as exc:
            raise ValidationError(f"Invalid total {total!r} (use a number >= 0)") from exc

        return Invoice(
            id=normalize_id(id),
            number=number_str,
            customer_name=customer,
            line_items=items,
            total=rounded_total,
            created_at=parse_timestamp(created_at),
        )

    def with_changes(
        self,
        number: Any = None,
        customer_name: Any = None,
        line_items: Any = None,
        total: Any = None,
    ) -> Invoice:
        """Return a re-validated copy. ``id`` and ``created_at`` never change."""
        return Invoice.create(
            id=self.id,
            number=self.number if number is None else number,
            customer_name=self.customer_name if customer_name is None else customer_name,
            line_items=self.line_items if line_items is None else line_items,
            total=self.total if total is None else total,
            created_at=self.created_at,
        )

    # --- Serialization --------------------------------------------------------

    def line_items_json(self) -> str:
        return json.dumps([item.to_plain() for item in self.line_items])

    def to_plain(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "number": self.number,
            "customer_name": self.customer_name,
            "line_items": [item.to_plain() for item in self.line_items],
            "total": self.total,
            "created_at": self.created_at.isoformat(),
        }

    @staticmethod
    def from_row(row: Mapping[str, Any]) -> Invoice:
        return Invoice.create(
            id=row["id"],
            number=row["number"],
            customer_name=row["customer_name"],
            line_items=json.loads(row["line_items"] or "[]"),
            total=row["total"],
            created_at=row["created_at"],
        )
