"""CLI commands for managing the sweet catalog."""

from __future__ import annotations

import click

from sweetshop.application.add_sweet import AddSweetHandler
from sweetshop.application.delete_sweet import DeleteSweetHandler
from sweetshop.application.dto import SweetDTO, SweetInput
from sweetshop.application.update_sweet import UpdateSweetHandler
from sweetshop.domain.exceptions import DomainException
from sweetshop.domain.model.product_filter import ProductFilter
from sweetshop.infrastructure.cli.context import current_caller, current_shop
from sweetshop.infrastructure.seed import seed_catalog


def _display_sweets(sweets: list[SweetDTO]) -> None:
    click.echo(f"{'ID':<36}  {'Name':<22} {'Category':<10} {'Price':>8} {'Stock':>6}")
    click.echo("-" * 88)
    for s in sweets:
        stock = str(s.quantity) if s.in_stock else "sold out"
        click.echo(f"{s.id:<36}  {s.name:<22} {s.category:<10} {s.price:>8} {stock:>6}")


@click.command("add")
@click.option("--name", required=True, help="Sweet name.")
@click.option("--category", required=True, help="Category (e.g. Chocolate).")
@click.option("--price", required=True, help="Price (e.g. 5.99).")
@click.option("--quantity", default="0", show_default=True, help="Initial stock.")
@click.option("--description", default=None, help="Optional description.")
@click.option("--image-url", default=None, help="Optional image URL.")
def sweet_add(
    name: str,
    category: str,
    price: str,
    quantity: str,
    description: str | None,
    image_url: str | None,
) -> None:
    """Add a new sweet to the catalog (admin)."""
    shop = current_shop()
    handler = AddSweetHandler(shop.ledger, shop.validator)

    try:
        dto = handler.handle(
            current_caller(),
            SweetInput(name, category, price, quantity, description, image_url),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sweet '{dto.name}' added at {dto.price} with {dto.quantity} in stock")
    click.echo(f"ID: {dto.id}")


@click.command("update")
@click.option("--id", "sweet_id", required=True, help="Sweet ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--category", default=None, help="New category.")
@click.option("--price", default=None, help="New price.")
@click.option("--description", default=None, help="New description ('' clears it).")
@click.option("--image-url", default=None, help="New image URL ('' clears it).")
def sweet_update(
    sweet_id: str,
    name: str | None,
    category: str | None,
    price: str | None,
    description: str | None,
    image_url: str | None,
) -> None:
    """Edit a sweet's details (admin)."""
    shop = current_shop()
    handler = UpdateSweetHandler(shop.ledger, shop.validator)

    try:
        dto = handler.handle(
            current_caller(),
            sweet_id,
            SweetInput(name=name, category=category, price=price,
                       description=description, image_url=image_url),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sweet '{dto.name}' updated")


@click.command("delete")
@click.option("--id", "sweet_id", required=True, help="Sweet ID.")
def sweet_delete(sweet_id: str) -> None:
    """Remove a sweet from the catalog (admin)."""
    handler = DeleteSweetHandler(current_shop().ledger)

    try:
        handler.handle(current_caller(), sweet_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sweet {sweet_id} deleted.")


@click.command("list")
@click.option("--name", default=None, help="Name contains (case-insensitive).")
@click.option("--category", default=None, help="Exact category.")
@click.option("--min-price", default=None, help="Minimum price (inclusive).")
@click.option("--max-price", default=None, help="Maximum price (inclusive).")
def sweet_list(
    name: str | None,
    category: str | None,
    min_price: str | None,
    max_price: str | None,
) -> None:
    """Search the catalog."""
    try:
        product_filter = ProductFilter.of(name, category, min_price, max_price)
        sweets = current_shop().catalog.search(product_filter)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not sweets:
        click.echo("No sweets found.")
        return
    _display_sweets(sweets)


@click.command("categories")
def sweet_categories() -> None:
    """List the categories currently in the catalog."""
    try:
        categories = current_shop().catalog.list_categories()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not categories:
        click.echo("No categories found.")
        return
    for category in categories:
        click.echo(category)


@click.command("seed")
def seed() -> None:
    """Populate an empty catalog with the demo sweets."""
    shop = current_shop()
    try:
        added = seed_catalog(shop.ledger, shop.validator)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if added:
        click.echo(f"Added {added} demo sweets.")
    else:
        click.echo("Catalog already has sweets; nothing added.")
