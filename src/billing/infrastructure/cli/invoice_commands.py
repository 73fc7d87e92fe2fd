"""CLI commands for the Invoice aggregate."""

from __future__ import annotations

import click

from billing.application.create_invoice import CreateInvoiceHandler
from billing.application.delete_invoice import DeleteInvoiceHandler
from billing.application.show_invoice import ListInvoicesHandler, ShowInvoiceHandler
from billing.application.update_invoice import UpdateInvoiceHandler
from billing.domain.exceptions import DomainException
from billing.domain.model.invoice import Invoice
from billing.infrastructure.cli.runtime import run


def _parse_items(raw: str) -> list[dict]:
    """Parse '1:3,7:0.5' into [{"productId": 1, "quantity": 3}, ...]."""
    items: list[dict] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty = (part.strip() for part in pair.split(":", 1))
        items.append({"productId": product_id, "quantity": qty})
    return items


def _display_invoice(invoice: Invoice) -> None:
    """Shared formatting for displaying an invoice."""
    click.echo(f"Invoice #{invoice.id}  (number={invoice.number})")
    click.echo(f"Customer: {invoice.customer_name}")
    click.echo(f"Created:  {invoice.created_at.isoformat()}")
    click.echo()
    click.echo(f"  {'Product':<10} {'Qty':>10}")
    click.echo(f"  {'-'*21}")
    for item in invoice.line_items:
        click.echo(f"  {item.product_id:<10} {item.quantity:>10}")
    click.echo(f"  {'-'*21}")
    click.echo(f"  {'Total':<10} {invoice.total:>10.2f}")


@click.command("create")
@click.option("--number", required=True, help="Invoice number (unique).")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
def invoice_create(number: str, customer: str, items: str) -> None:
    """Create an invoice priced at current product prices."""
    line_items = _parse_items(items)

    async def _create(backends, settings):
        handler = CreateInvoiceHandler(
            invoice_repo=backends.invoices.repository,
            product_repo=backends.products.repository,
        )
        return await handler.handle(number=number, customer_name=customer, line_items=line_items)

    try:
        invoice = run(_create)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_invoice(invoice)


@click.command("show")
@click.option("--id", "invoice_id", required=True, type=int, help="Invoice ID to display.")
def invoice_show(invoice_id: int) -> None:
    """Show details of an existing invoice."""

    async def _show(backends, settings):
        return await ShowInvoiceHandler(backends.invoices.repository).handle(invoice_id)

    try:
        invoice = run(_show)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_invoice(invoice)


@click.command("list")
def invoice_list() -> None:
    """List invoices, newest first."""

    async def _list(backends, settings):
        return await ListInvoicesHandler(backends.invoices.repository).handle()

    invoices = run(_list)

    if not invoices:
        click.echo("No invoices found.")
        return

    click.echo(f"{'ID':<6} {'Number':<16} {'Customer':<24} {'Total':>10}")
    click.echo("-" * 59)
    for inv in invoices:
        click.echo(f"{inv.id:<6} {inv.number:<16} {inv.customer_name:<24} {inv.total:>10.2f}")


@click.command("update")
@click.option("--id", "invoice_id", required=True, type=int, help="Invoice ID to update.")
@click.option("--number", default=None, help="New invoice number.")
@click.option("--customer", default=None, help="New customer name.")
@click.option("--items", "items_str", default=None, help="New items as 'ProductId:Qty,...'.")
def invoice_update(
    invoice_id: int,
    number: str | None,
    customer: str | None,
    items_str: str | None,
) -> None:
    """Update an invoice and re-price it at current product prices."""
    line_items = _parse_items(items_str) if items_str else None

    async def _update(backends, settings):
        handler = UpdateInvoiceHandler(
            invoice_repo=backends.invoices.repository,
            product_repo=backends.products.repository,
        )
        return await handler.handle(
            invoice_id, number=number, customer_name=customer, line_items=line_items
        )

    try:
        invoice = run(_update)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_invoice(invoice)


@click.command("remove")
@click.option("--id", "invoice_id", required=True, type=int, help="Invoice ID to remove.")
def invoice_remove(invoice_id: int) -> None:
    """Delete an invoice."""

    async def _remove(backends, settings):
        await DeleteInvoiceHandler(backends.invoices.repository).handle(invoice_id)

    try:
        run(_remove)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Invoice #{invoice_id} removed.")
