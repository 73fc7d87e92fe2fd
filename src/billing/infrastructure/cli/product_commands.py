"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from billing.application.add_product import AddProductHandler
from billing.application.remove_product import RemoveProductHandler
from billing.application.show_product import ListProductsHandler, ShowProductHandler
from billing.application.update_product import UpdateProductHandler
from billing.domain.exceptions import DomainException
from billing.infrastructure.cli.runtime import run


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""

    async def _list(backends, settings):
        return await ListProductsHandler(backends.products.repository).handle()

    products = run(_list)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<30} {'Price':>10}")
    click.echo("-" * 48)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<30} {p.price:>10.2f}")


@click.command("show")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_show(product_id: int) -> None:
    """Show one product."""

    async def _show(backends, settings):
        return await ShowProductHandler(backends.products.repository).handle(product_id)

    try:
        product = run(_show)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' at {product.price:.2f}")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
def product_add(name: str, price: str) -> None:
    """Add a new product to the catalog."""

    async def _add(backends, settings):
        return await AddProductHandler(backends.products.repository).handle(name=name, price=price)

    try:
        product = run(_add)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price:.2f}")


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
def product_update(product_id: int, name: str | None, price: str | None) -> None:
    """Update a product's name and/or price."""
    if name is None and price is None:
        raise click.ClickException("Nothing to update: pass --name and/or --price")

    async def _update(backends, settings):
        handler = UpdateProductHandler(backends.products.repository)
        return await handler.handle(product_id, name=name, price=price)

    try:
        product = run(_update)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' now at {product.price:.2f}")


@click.command("remove")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_remove(product_id: int) -> None:
    """Remove a product from the catalog."""

    async def _remove(backends, settings):
        await RemoveProductHandler(backends.products.repository).handle(product_id)

    try:
        run(_remove)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} removed.")
