"""CLI commands for purchases and restocking."""

from __future__ import annotations

import click

from sweetshop.application.purchase_sweet import PurchaseSweetHandler
from sweetshop.application.restock_sweet import RestockSweetHandler
from sweetshop.domain.exceptions import DomainException
from sweetshop.infrastructure.cli.context import current_caller, current_shop


@click.command("purchase")
@click.option("--id", "sweet_id", required=True, help="Sweet ID.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to buy.")
def stock_purchase(sweet_id: str, quantity: int) -> None:
    """Buy a sweet (decrements stock)."""
    handler = PurchaseSweetHandler(current_shop().ledger)

    try:
        receipt = handler.handle(current_caller(), sweet_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Purchase {receipt.purchase_id} successful!")
    click.echo(f"  {receipt.quantity} x {receipt.sweet_name} @ {receipt.unit_price} = {receipt.total}")
    click.echo(f"  {receipt.remaining} left in stock")


@click.command("restock")
@click.option("--id", "sweet_id", required=True, help="Sweet ID.")
@click.option("--quantity", required=True, type=int, help="Units to add.")
def stock_restock(sweet_id: str, quantity: int) -> None:
    """Add stock for a sweet (admin)."""
    handler = RestockSweetHandler(current_shop().ledger)

    try:
        level = handler.handle(current_caller(), sweet_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sweet {sweet_id} restocked, {level.quantity} now in stock.")
