import json
import logging

import click

from billing.infrastructure.cli.auth_commands import auth_login, auth_register, auth_whoami
from billing.infrastructure.cli.invoice_commands import (
    invoice_create,
    invoice_list,
    invoice_remove,
    invoice_show,
    invoice_update,
)
from billing.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_remove,
    product_show,
    product_update,
)
from billing.infrastructure.cli.runtime import run
from billing.infrastructure.cli.user_commands import (
    user_list,
    user_remove,
    user_show,
    user_update,
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log backend selection.")
def cli(verbose: bool) -> None:
    """Billing: users, products and invoices across three stores."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command("backends")
def backends() -> None:
    """Show which storage backend each aggregate resolved to."""

    async def _describe(resolved, settings):
        return {"app": settings.app_name, **resolved.describe()}

    click.echo(json.dumps(run(_describe), indent=2))


@cli.group()
def invoice() -> None:
    """Manage invoices."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def user() -> None:
    """Manage users."""


@cli.group()
def auth() -> None:
    """Register, log in and inspect tokens."""


# Register subcommands
invoice.add_command(invoice_create)
invoice.add_command(invoice_list)
invoice.add_command(invoice_remove)
invoice.add_command(invoice_show)
invoice.add_command(invoice_update)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_remove)
product.add_command(product_show)
product.add_command(product_update)
user.add_command(user_list)
user.add_command(user_remove)
user.add_command(user_show)
user.add_command(user_update)
auth.add_command(auth_login)
auth.add_command(auth_register)
auth.add_command(auth_whoami)
