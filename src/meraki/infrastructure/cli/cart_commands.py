"""CLI commands for the cart, checkout and purchase history."""

from __future__ import annotations

import click

from meraki.application.checkout import CheckoutHandler
from meraki.application.dto import CartDTO
from meraki.application.manage_cart import (
    AddToCartHandler,
    ClearCartHandler,
    RemoveFromCartHandler,
    ShowCartHandler,
    UpdateCartQuantityHandler,
)
from meraki.application.purchase_history import ClearPurchasesHandler, ListPurchasesHandler
from meraki.domain.exceptions import DomainException
from meraki.infrastructure.bootstrap import open_container


def _display_cart(dto: CartDTO) -> None:
    """Shared formatting for displaying the cart with its totals."""
    if not dto.items:
        click.echo("Your cart is empty.")
        return

    click.echo(f"  {'Product':<30} {'Qty':>5} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*62}")
    for item in dto.items:
        click.echo(
            f"  {item.title:<30} {item.quantity:>5} {item.unit_price:>12} {item.line_total:>12}"
        )
    click.echo(f"  {'-'*62}")
    click.echo(f"  {'Subtotal':<37} {dto.subtotal:>25}")
    click.echo(f"  {'Estimated tax':<37} {dto.tax:>25}")
    click.echo(f"  {'Shipping':<37} {dto.shipping:>25}")
    click.echo(f"  {'Total':<37} {dto.total:>25}")


@click.command("show")
def cart_show() -> None:
    """Show the cart with subtotal, tax, shipping and total."""
    with open_container() as app:
        dto = ShowCartHandler(app.session, app.policy).handle()
    _display_cart(dto)


@click.command("add")
@click.option("--handle", required=True, help="Product handle.")
@click.option("--quantity", default=1, type=int, show_default=True)
def cart_add(handle: str, quantity: int) -> None:
    """Add a product to the cart."""
    with open_container() as app:
        try:
            item = AddToCartHandler(app.session, app.products).handle(handle, quantity)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"'{item.product.title}' in cart (Qty: {item.quantity})")


@click.command("remove")
@click.option("--handle", required=True, help="Product handle.")
def cart_remove(handle: str) -> None:
    """Remove a product from the cart."""
    with open_container() as app:
        try:
            RemoveFromCartHandler(app.session).handle(handle)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"'{handle}' removed from cart.")


@click.command("update")
@click.option("--handle", required=True, help="Product handle.")
@click.option("--quantity", required=True, type=int, help="New quantity; 0 removes.")
def cart_update(handle: str, quantity: int) -> None:
    """Set the quantity of a cart item."""
    with open_container() as app:
        try:
            item = UpdateCartQuantityHandler(app.session).handle(handle, quantity)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    if item is None:
        click.echo(f"'{handle}' removed from cart.")
    else:
        click.echo(f"'{item.product.title}' quantity set to {item.quantity}")


@click.command("clear")
def cart_clear() -> None:
    """Empty the cart. Purchase history is kept."""
    with open_container() as app:
        dropped = ClearCartHandler(app.session).handle()
    click.echo(f"Cart cleared ({dropped} item(s) removed).")


@click.command("checkout")
def checkout() -> None:
    """Send the cart as a WhatsApp order and archive the purchase."""
    with open_container() as app:
        handler = CheckoutHandler(
            session=app.session,
            tracker=app.tracker,
            policy=app.policy,
            whatsapp_number=app.settings.WHATSAPP_NUMBER,
        )
        try:
            dto = handler.handle()
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Purchase {dto.purchase_id} recorded.")
    click.echo(f"  {'Subtotal':<15} {dto.subtotal:>15}")
    click.echo(f"  {'Estimated tax':<15} {dto.tax:>15}")
    click.echo(f"  {'Shipping':<15} {dto.shipping:>15}")
    click.echo(f"  {'Total':<15} {dto.total:>15}")
    click.echo()
    click.echo(dto.message)
    click.echo()
    click.echo("Open this link to send the order on WhatsApp:")
    click.echo(dto.whatsapp_url)


@click.command("list")
def purchases_list() -> None:
    """List completed purchases, most recent first."""
    with open_container() as app:
        purchases = ListPurchasesHandler(app.session).handle()

    if not purchases:
        click.echo("No purchases yet.")
        return

    click.echo(f"{'Purchase':<32} {'Date':<22} {'Items':>6} {'Total':>14}")
    click.echo("-" * 77)
    for p in purchases:
        click.echo(f"{p.id:<32} {p.created_at:<22} {p.item_count:>6} {p.total:>14}")


@click.command("clear")
def purchases_clear() -> None:
    """Forget the purchase history."""
    with open_container() as app:
        cleared = ClearPurchasesHandler(app.session).handle()
    click.echo(f"Purchase history cleared ({cleared} purchase(s)).")
