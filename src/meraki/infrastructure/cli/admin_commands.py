"""CLI commands for the admin dashboard."""

from __future__ import annotations

import click

from meraki.application.admin_auth import AdminLoginHandler
from meraki.application.dashboard_stats import DashboardStatsHandler
from meraki.domain.exceptions import DomainException
from meraki.infrastructure.bootstrap import open_container
from meraki.infrastructure.cli.catalog_commands import token_option


@click.command("login")
@click.option("--email", required=True)
@click.option("--password", required=True, prompt=True, hide_input=True)
def admin_login(email: str, password: str) -> None:
    """Log in and print an admin token."""
    with open_container() as app:
        handler = AdminLoginHandler(app.admins, app.hasher, app.tokens)
        try:
            result = handler.handle(email, password)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Logged in as {result.name or result.email}.", err=True)
    click.echo("Export it with: export MERAKI_ADMIN_TOKEN=<token>", err=True)
    click.echo(result.token)


@click.command("stats")
@token_option
def admin_stats(token: str | None) -> None:
    """Show dashboard statistics."""
    with open_container() as app:
        handler = DashboardStatsHandler(app.guard, app.products, app.categories, app.session)
        try:
            stats = handler.handle(token)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Products:   {stats.total_products}")
    click.echo(f"Categories: {stats.total_categories}")
    click.echo(f"Inventory:  {stats.total_inventory} unit(s)")
    click.echo(f"Purchases:  {stats.total_purchases}")
    if stats.recent_purchases:
        click.echo()
        click.echo("Recent purchases:")
        for p in stats.recent_purchases:
            click.echo(f"  {p.id:<32} {p.created_at:<22} {p.total:>14}")
