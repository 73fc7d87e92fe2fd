"""CLI commands for registration, login and token inspection."""

from __future__ import annotations

import click

from billing.application.login_user import LoginUserHandler
from billing.application.register_user import RegisterUserHandler
from billing.domain.exceptions import DomainException
from billing.infrastructure.bootstrap import password_hasher, token_issuer
from billing.infrastructure.cli.runtime import run
from billing.infrastructure.config import Settings


@click.command("register")
@click.option("--name", required=True, help="Display name.")
@click.option("--email", required=True, help="Email address.")
@click.password_option("--password", help="Password.")
def auth_register(name: str, email: str, password: str) -> None:
    """Create a user and print a signed token."""

    async def _register(backends, settings):
        handler = RegisterUserHandler(
            user_repo=backends.users.repository,
            password_hasher=password_hasher(settings),
            token_issuer=token_issuer(settings),
        )
        return await handler.handle(name=name, email=email, password=password)

    try:
        result = run(_register)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User #{result.user['id']} registered as {result.user['email']}")
    click.echo(result.token)


@click.command("login")
@click.option("--email", required=True, help="Email address.")
@click.option("--password", prompt=True, hide_input=True, help="Password.")
def auth_login(email: str, password: str) -> None:
    """Check credentials and print a signed token."""

    async def _login(backends, settings):
        handler = LoginUserHandler(
            user_repo=backends.users.repository,
            password_hasher=password_hasher(settings),
            token_issuer=token_issuer(settings),
        )
        return await handler.handle(email=email, password=password)

    try:
        result = run(_login)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Logged in as {result.user['email']}")
    click.echo(result.token)


@click.command("whoami")
@click.option("--token", required=True, help="Token printed by register/login.")
def auth_whoami(token: str) -> None:
    """Verify a token and print its payload."""
    try:
        payload = token_issuer(Settings.from_env()).verify(token)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User #{payload['id']} <{payload['email']}>")
