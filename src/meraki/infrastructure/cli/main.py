import logging

import click

from meraki.infrastructure.cli.admin_commands import admin_login, admin_stats
from meraki.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
    checkout,
    purchases_clear,
    purchases_list,
)
from meraki.infrastructure.cli.catalog_commands import (
    category_add,
    category_delete,
    category_list,
    product_add,
    product_delete,
    product_import,
    product_list,
    product_show,
    product_update,
)
from meraki.infrastructure.config import Settings


@click.group()
def cli() -> None:
    """Meraki — luxury goods storefront"""
    logging.basicConfig(
        level=Settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def product() -> None:
    """Browse and manage products."""


@cli.group()
def category() -> None:
    """Browse and manage categories."""


@cli.group()
def cart() -> None:
    """Manage the shopping cart."""


@cli.group()
def purchases() -> None:
    """Review completed purchases."""


@cli.group()
def admin() -> None:
    """Admin login and dashboard."""


# Register subcommands
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_add)
product.add_command(product_update)
product.add_command(product_delete)
product.add_command(product_import)
category.add_command(category_list)
category.add_command(category_add)
category.add_command(category_delete)
cart.add_command(cart_show)
cart.add_command(cart_add)
cart.add_command(cart_remove)
cart.add_command(cart_update)
cart.add_command(cart_clear)
cli.add_command(checkout)
purchases.add_command(purchases_list)
purchases.add_command(purchases_clear)
admin.add_command(admin_login)
admin.add_command(admin_stats)
