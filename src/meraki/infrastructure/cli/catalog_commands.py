"""CLI commands for the Product and Category aggregates."""

from __future__ import annotations

import json

import click

from meraki.application.browse_catalog import (
    ListCategoriesHandler,
    ListProductsHandler,
    ShowProductHandler,
)
from meraki.application.dto import ProductSpec
from meraki.application.manage_categories import AddCategoryHandler, DeleteCategoryHandler
from meraki.application.manage_products import (
    AddProductHandler,
    DeleteProductHandler,
    ImportProductsHandler,
    UpdateProductHandler,
)
from meraki.domain.exceptions import DomainException
from meraki.domain.model.value_objects import Money
from meraki.domain.service.catalog_filter import ALL, CatalogFilter, SortKey
from meraki.infrastructure.bootstrap import open_container

token_option = click.option(
    "--token",
    envvar="MERAKI_ADMIN_TOKEN",
    help="Admin token from 'meraki admin login' (or $MERAKI_ADMIN_TOKEN).",
)


# --- Products -----------------------------------------------------------------


@click.command("list")
@click.option("--category", default=ALL, show_default=True, help="Category name.")
@click.option("--subcategory", default=ALL, show_default=True, help="Subcategory name.")
@click.option("--search", default="", help="Match title, description or tags.")
@click.option(
    "--sort",
    type=click.Choice([k.value for k in SortKey]),
    default=SortKey.NONE.value,
    show_default=True,
)
@click.option("--page", default=1, type=int, show_default=True)
@click.option("--limit", default=100, type=int, show_default=True)
def product_list(
    category: str, subcategory: str, search: str, sort: str, page: int, limit: int
) -> None:
    """List products in the catalog."""
    catalog_filter = CatalogFilter(
        category=category,
        subcategory=subcategory,
        search_term=search,
        sort_key=SortKey(sort),
    )

    with open_container() as app:
        try:
            result = ListProductsHandler(app.products).handle(catalog_filter, page, limit)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    if not result.products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Handle':<28} {'Category':<18} {'Price':>12} {'Stock':>6}")
    click.echo("-" * 74)
    for p in result.products:
        click.echo(
            f"{p.id:<6} {p.handle:<28} {p.category:<18} {p.price:>12} {p.inventory:>6}"
        )
    click.echo(f"Page {result.page} of {result.pages} ({result.total} products)")


@click.command("show")
@click.option("--handle", required=True, help="Product handle.")
def product_show(handle: str) -> None:
    """Show details of a product."""
    with open_container() as app:
        try:
            product = ShowProductHandler(app.products).handle(handle)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    price = str(Money.of(product.price)) if product.price else "-"
    click.echo(f"{product.title}  ({product.handle}, #{product.id})")
    click.echo(f"Brand:     {product.brand}")
    click.echo(f"Category:  {product.category} / {product.subcategory or '-'}")
    click.echo(f"Condition: {product.condition}")
    click.echo(f"Price:     {price}")
    click.echo(f"In stock:  {product.inventory}")
    click.echo()
    click.echo(product.description)
    for highlight in product.highlights:
        click.echo(f"  * {highlight}")
    if product.tags:
        click.echo(f"Tags: {', '.join(product.tags)}")


@click.command("add")
@token_option
@click.option("--title", required=True)
@click.option("--description", required=True)
@click.option("--image", required=True, help="Image URL or path.")
@click.option("--price", required=True, type=int, help="Price in rupees.")
@click.option("--category", required=True, help="Existing category name.")
@click.option("--brand", required=True)
@click.option("--condition", required=True)
@click.option("--subcategory", default="")
@click.option("--highlight", "highlights", multiple=True, help="Repeatable.")
@click.option("--tag", "tags", multiple=True, help="Repeatable.")
@click.option("--inventory", default=0, type=int, show_default=True)
def product_add(token: str | None, highlights: tuple[str, ...], tags: tuple[str, ...], **fields) -> None:
    """Add a new product to the catalog."""
    spec = ProductSpec(highlights=list(highlights), tags=list(tags), **fields)

    with open_container() as app:
        handler = AddProductHandler(app.guard, app.products, app.categories)
        try:
            product = handler.handle(token, spec)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.title}' added as '{product.handle}'")


@click.command("update")
@token_option
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--title")
@click.option("--description")
@click.option("--image")
@click.option("--price", type=int)
@click.option("--category")
@click.option("--subcategory")
@click.option("--brand")
@click.option("--condition")
@click.option("--inventory", type=int)
@click.option("--highlight", "highlights", multiple=True, help="Replaces all highlights.")
@click.option("--tag", "tags", multiple=True, help="Replaces all tags.")
def product_update(token: str | None, product_id: int, **fields) -> None:
    """Update fields of an existing product."""
    changes = {
        name: value
        for name, value in fields.items()
        if value is not None and value != ()
    }
    if not changes:
        raise click.UsageError("Nothing to update.")

    with open_container() as app:
        handler = UpdateProductHandler(app.guard, app.products, app.categories)
        try:
            handler.handle(token, product_id, **changes)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} updated ({', '.join(sorted(changes))})")


@click.command("delete")
@token_option
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_delete(token: str | None, product_id: int) -> None:
    """Remove a product from the catalog."""
    with open_container() as app:
        try:
            DeleteProductHandler(app.guard, app.products).handle(token, product_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted.")


@click.command("import")
@token_option
@click.option(
    "--file",
    "file_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="JSON array of product records.",
)
def product_import(token: str | None, file_path: str) -> None:
    """Create or update products from a JSON catalog file."""
    with open(file_path, encoding="utf-8") as fh:
        try:
            records = json.load(fh)
        except ValueError as exc:
            raise click.ClickException(f"Invalid JSON in {file_path}: {exc}")
    if not isinstance(records, list):
        raise click.ClickException("Expected a JSON array of products.")

    with open_container() as app:
        handler = ImportProductsHandler(app.guard, app.products, app.categories)
        try:
            result = handler.handle(token, records)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Imported: {result.created} created, {result.updated} updated")
    for entry in result.skipped:
        click.echo(f"  skipped {entry.label}: {entry.reason}")


# --- Categories ---------------------------------------------------------------


@click.command("list")
def category_list() -> None:
    """List categories with their product counts."""
    with open_container() as app:
        categories = ListCategoriesHandler(app.categories).handle()

    click.echo(f"{'ID':<6} {'Name':<20} {'Products':>9}")
    click.echo("-" * 37)
    for c in categories:
        click.echo(f"{c.id:<6} {c.name:<20} {c.product_count:>9}")


@click.command("add")
@token_option
@click.option("--name", required=True)
@click.option("--description", default=None)
def category_add(token: str | None, name: str, description: str | None) -> None:
    """Add a category."""
    with open_container() as app:
        try:
            category = AddCategoryHandler(app.guard, app.categories).handle(
                token, name, description
            )
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Category #{category.id} '{category.name}' added")


@click.command("delete")
@token_option
@click.option("--id", "category_id", required=True, type=int, help="Category ID.")
def category_delete(token: str | None, category_id: int) -> None:
    """Delete an empty category."""
    with open_container() as app:
        handler = DeleteCategoryHandler(app.guard, app.categories, app.products)
        try:
            handler.handle(token, category_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Category #{category_id} deleted.")
