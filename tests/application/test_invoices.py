"""Integration tests for the invoice use cases.

Invoices and products live in separate in-memory stores, exactly as they
would on separate backends in production.
"""

import pytest

from billing.application.create_invoice import CreateInvoiceHandler
from billing.application.delete_invoice import DeleteInvoiceHandler
from billing.application.show_invoice import ListInvoicesHandler, ShowInvoiceHandler
from billing.application.update_invoice import UpdateInvoiceHandler
from billing.application.update_product import UpdateProductHandler
from billing.domain.exceptions import DuplicateError, EntityNotFoundError, ValidationError
from billing.infrastructure.persistence.memory_invoice_repository import (
    MemoryInvoiceRepository,
)
from billing.infrastructure.persistence.memory_product_repository import (
    MemoryProductRepository,
)


def _setup():
    product_repo = MemoryProductRepository(seed=[
        {"id": 1, "name": "Blue ballpoint pen", "price": 3.5},
        {"id": 5, "name": "Gouache paint 250ml", "price": 14.9},
        {"id": 7, "name": "Colored pencils", "price": 34.9},
    ])
    invoice_repo = MemoryInvoiceRepository()
    return invoice_repo, product_repo


class TestCreateInvoice:

    @pytest.mark.asyncio
    async def test_total_computed_from_current_prices(self):
        invoice_repo, product_repo = _setup()
        invoice = await CreateInvoiceHandler(invoice_repo, product_repo).handle(
            number="INV-001",
            customer_name="Acme Ltda",
            line_items=[{"productId": 1, "quantity": 3}, {"productId": 7, "quantity": 1}],
        )
        assert invoice.id == 1
        assert invoice.total == 45.4
        assert await invoice_repo.find_by_id(1) == invoice

    @pytest.mark.asyncio
    async def test_missing_fields_rejected(self):
        invoice_repo, product_repo = _setup()
        handler = CreateInvoiceHandler(invoice_repo, product_repo)
        with pytest.raises(ValidationError, match="number, customer_name and line_items are required"):
            await handler.handle(number="", customer_name="Acme", line_items=[])

    @pytest.mark.asyncio
    async def test_unknown_product_persists_nothing(self):
        invoice_repo, product_repo = _setup()
        handler = CreateInvoiceHandler(invoice_repo, product_repo)
        with pytest.raises(EntityNotFoundError, match="Product id=99"):
            await handler.handle(
                number="INV-002",
                customer_name="Acme Ltda",
                line_items=[{"productId": 1, "quantity": 1}, {"productId": 99, "quantity": 1}],
            )
        assert await invoice_repo.find_all() == []

    @pytest.mark.asyncio
    async def test_duplicate_number_rejected(self):
        invoice_repo, product_repo = _setup()
        handler = CreateInvoiceHandler(invoice_repo, product_repo)
        await handler.handle(number="INV-001", customer_name="Acme", line_items=[])
        with pytest.raises(DuplicateError, match="INV-001"):
            await handler.handle(number="INV-001", customer_name="Globex", line_items=[])
        assert len(await invoice_repo.find_all()) == 1


class TestFrozenTotals:

    @pytest.mark.asyncio
    async def test_price_change_does_not_touch_stored_invoice(self):
        invoice_repo, product_repo = _setup()
        created = await CreateInvoiceHandler(invoice_repo, product_repo).handle(
            number="INV-010",
            customer_name="Acme Ltda",
            line_items=[{"productId": 1, "quantity": 2}],
        )
        assert created.total == 7.0

        await UpdateProductHandler(product_repo).handle(1, price=10)

        stored = await ShowInvoiceHandler(invoice_repo).handle(created.id)
        assert stored.total == 7.0

        fresh = await CreateInvoiceHandler(invoice_repo, product_repo).handle(
            number="INV-012",
            customer_name="Acme Ltda",
            line_items=[{"productId": 1, "quantity": 2}],
        )
        assert fresh.total == 20.0

    @pytest.mark.asyncio
    async def test_update_reprices_at_current_prices(self):
        invoice_repo, product_repo = _setup()
        created = await CreateInvoiceHandler(invoice_repo, product_repo).handle(
            number="INV-011",
            customer_name="Acme Ltda",
            line_items=[{"productId": 1, "quantity": 2}],
        )
        await UpdateProductHandler(product_repo).handle(1, price=10)

        updated = await UpdateInvoiceHandler(invoice_repo, product_repo).handle(
            created.id, customer_name="Acme Holdings"
        )
        assert updated.total == 20.0
        assert updated.customer_name == "Acme Holdings"
        assert updated.created_at == created.created_at
        assert updated.number == "INV-011"


class TestUpdateInvoice:

    @pytest.mark.asyncio
    async def test_replace_line_items(self):
        invoice_repo, product_repo = _setup()
        created = await CreateInvoiceHandler(invoice_repo, product_repo).handle(
            number="INV-020", customer_name="Acme", line_items=[{"productId": 1, "quantity": 1}]
        )
        updated = await UpdateInvoiceHandler(invoice_repo, product_repo).handle(
            created.id, line_items=[{"productId": 5, "quantity": 0.5}]
        )
        assert updated.total == 7.45
        assert [item.product_id for item in updated.line_items] == [5]

    @pytest.mark.asyncio
    async def test_number_taken_by_another_invoice(self):
        invoice_repo, product_repo = _setup()
        create = CreateInvoiceHandler(invoice_repo, product_repo)
        await create.handle(number="INV-A", customer_name="Acme", line_items=[])
        second = await create.handle(number="INV-B", customer_name="Acme", line_items=[])

        with pytest.raises(DuplicateError):
            await UpdateInvoiceHandler(invoice_repo, product_repo).handle(second.id, number="INV-A")

    @pytest.mark.asyncio
    async def test_keeping_own_number_is_fine(self):
        invoice_repo, product_repo = _setup()
        created = await CreateInvoiceHandler(invoice_repo, product_repo).handle(
            number="INV-C", customer_name="Acme", line_items=[]
        )
        updated = await UpdateInvoiceHandler(invoice_repo, product_repo).handle(
            created.id, number="INV-C"
        )
        assert updated.number == "INV-C"

    @pytest.mark.asyncio
    async def test_unknown_product_leaves_invoice_unchanged(self):
        invoice_repo, product_repo = _setup()
        created = await CreateInvoiceHandler(invoice_repo, product_repo).handle(
            number="INV-D", customer_name="Acme", line_items=[{"productId": 1, "quantity": 1}]
        )
        with pytest.raises(EntityNotFoundError):
            await UpdateInvoiceHandler(invoice_repo, product_repo).handle(
                created.id, line_items=[{"productId": 404, "quantity": 1}]
            )
        assert await invoice_repo.find_by_id(created.id) == created

    @pytest.mark.asyncio
    async def test_missing_invoice(self):
        invoice_repo, product_repo = _setup()
        with pytest.raises(EntityNotFoundError, match="Invoice #3 not found"):
            await UpdateInvoiceHandler(invoice_repo, product_repo).handle(3, customer_name="Acme")


class TestListAndDeleteInvoice:

    @pytest.mark.asyncio
    async def test_list_newest_first(self):
        invoice_repo, product_repo = _setup()
        create = CreateInvoiceHandler(invoice_repo, product_repo)
        for number in ("INV-1", "INV-2", "INV-3"):
            await create.handle(number=number, customer_name="Acme", line_items=[])
        invoices = await ListInvoicesHandler(invoice_repo).handle()
        assert [inv.number for inv in invoices] == ["INV-3", "INV-2", "INV-1"]

    @pytest.mark.asyncio
    async def test_delete_then_missing(self):
        invoice_repo, product_repo = _setup()
        created = await CreateInvoiceHandler(invoice_repo, product_repo).handle(
            number="INV-X", customer_name="Acme", line_items=[]
        )
        await DeleteInvoiceHandler(invoice_repo).handle(created.id)
        with pytest.raises(EntityNotFoundError):
            await DeleteInvoiceHandler(invoice_repo).handle(created.id)
        with pytest.raises(EntityNotFoundError):
            await ShowInvoiceHandler(invoice_repo).handle(created.id)


class TestLargeAmountsInvoice:

    @pytest.mark.asyncio
    async def test_large_price_times_large_quantity(self):
        product_repo = MemoryProductRepository(seed=[{"id": 1, "name": "Tanker", "price": 1e20}])
        invoice = await CreateInvoiceHandler(MemoryInvoiceRepository(), product_repo).handle(
            number="INV-BIG", customer_name="Acme", line_items=[{"productId": 1, "quantity": 1e9}]
        )
        assert invoice.total == 1e29

    @pytest.mark.asyncio
    async def test_total_past_float_range_is_a_validation_error(self):
        invoice_repo, product_repo = _setup()
        with pytest.raises(ValidationError, match="too large"):
            await CreateInvoiceHandler(invoice_repo, product_repo).handle(
                number="INV-HUGE",
                customer_name="Acme",
                line_items=[{"productId": 1, "quantity": 10**400}],
            )
        assert await invoice_repo.find_all() == []
