"""CLI commands for the User aggregate (users are created via `auth register`)."""

from __future__ import annotations

import click

from billing.application.remove_user import RemoveUserHandler
from billing.application.show_user import ListUsersHandler, ShowUserHandler
from billing.application.update_user import UpdateUserHandler
from billing.domain.exceptions import DomainException
from billing.infrastructure.cli.runtime import run


def _display_user(user: dict) -> None:
    click.echo(f"User #{user['id']}  {user['name']} <{user['email']}>  (since {user['created_at']})")


@click.command("list")
def user_list() -> None:
    """List users, newest first."""

    async def _list(backends, settings):
        return await ListUsersHandler(backends.users.repository).handle()

    users = run(_list)

    if not users:
        click.echo("No users found.")
        return
    for user in users:
        _display_user(user)


@click.command("show")
@click.option("--id", "user_id", required=True, type=int, help="User ID.")
def user_show(user_id: int) -> None:
    """Show one user."""

    async def _show(backends, settings):
        return await ShowUserHandler(backends.users.repository).handle(user_id)

    try:
        user = run(_show)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_user(user)


@click.command("update")
@click.option("--id", "user_id", required=True, type=int, help="User ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--email", default=None, help="New email.")
def user_update(user_id: int, name: str | None, email: str | None) -> None:
    """Change a user's name and/or email."""

    async def _update(backends, settings):
        return await UpdateUserHandler(backends.users.repository).handle(
            user_id, name=name, email=email
        )

    try:
        user = run(_update)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_user(user)


@click.command("remove")
@click.option("--id", "user_id", required=True, type=int, help="User ID.")
def user_remove(user_id: int) -> None:
    """Delete a user."""

    async def _remove(backends, settings):
        await RemoveUserHandler(backends.users.repository).handle(user_id)

    try:
        run(_remove)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User #{user_id} removed.")
