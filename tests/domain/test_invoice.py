"""Unit tests for the Invoice aggregate and its line items."""

import json

import pytest

from billing.domain.exceptions import ValidationError
from billing.domain.model.invoice import Invoice, InvoiceLineItem, parse_line_items


class TestLineItems:

    def test_accepts_both_key_spellings(self):
        items = parse_line_items([
            {"productId": "1", "quantity": "3"},
            {"product_id": 2, "quantity": 0.5},
        ])
        assert items == (
            InvoiceLineItem(product_id=1, quantity=3),
            InvoiceLineItem(product_id=2, quantity=0.5),
        )

    def test_not_a_list_rejected(self):
        for raw in ("1:3", {"productId": 1, "quantity": 1}, 42, None):
            with pytest.raises(ValidationError, match="line_items must be a list"):
                parse_line_items(raw)

    def test_empty_list_allowed(self):
        assert parse_line_items([]) == ()

    def test_bad_product_id_reports_index(self):
        with pytest.raises(ValidationError, match=r"line_items\[1\]\.productId"):
            parse_line_items([{"productId": 1, "quantity": 1}, {"productId": 0, "quantity": 1}])

    def test_bad_quantity_reports_index(self):
        with pytest.raises(ValidationError, match=r"line_items\[0\]\.quantity"):
            parse_line_items([{"productId": 1, "quantity": -3}])

    def test_non_object_item_rejected(self):
        with pytest.raises(ValidationError, match=r"line_items\[0\] must be an object"):
            parse_line_items(["1:3"])


class TestInvoiceCreate:

    def _invoice(self, **overrides):
        fields = {
            "number": " INV-1 ",
            "customer_name": " Acme Ltda ",
            "line_items": [{"productId": 1, "quantity": 2}],
            "total": 7.0,
        }
        fields.update(overrides)
        return Invoice.create(**fields)

    def test_trims_fields(self):
        invoice = self._invoice()
        assert invoice.number == "INV-1"
        assert invoice.customer_name == "Acme Ltda"

    def test_number_required(self):
        with pytest.raises(ValidationError, match="Invoice number is required"):
            self._invoice(number="  ")

    def test_short_customer_rejected(self):
        with pytest.raises(ValidationError, match="Customer name too short"):
            self._invoice(customer_name="A")

    def test_negative_total_rejected(self):
        with pytest.raises(ValidationError, match="Invalid total"):
            self._invoice(total=-0.01)

    def test_with_changes_keeps_identity(self):
        invoice = self._invoice(id=5)
        changed = invoice.with_changes(customer_name="Globex", total=1)
        assert changed.id == 5
        assert changed.created_at == invoice.created_at
        assert changed.number == "INV-1"
        assert changed.total == 1.0

    def test_row_round_trip_through_json_text(self):
        invoice = self._invoice(id=5)
        row = {
            "id": 5,
            "number": invoice.number,
            "customer_name": invoice.customer_name,
            "line_items": invoice.line_items_json(),
            "total": invoice.total,
            "created_at": invoice.created_at.isoformat(),
        }
        assert Invoice.from_row(row) == invoice
        assert json.loads(row["line_items"]) == [{"productId": 1, "quantity": 2}]
