import click

from sweetshop.infrastructure.bootstrap import configure_logging
from sweetshop.infrastructure.cli.chat_commands import chat
from sweetshop.infrastructure.cli.stock_commands import stock_purchase, stock_restock
from sweetshop.infrastructure.cli.sweet_commands import (
    seed,
    sweet_add,
    sweet_categories,
    sweet_delete,
    sweet_list,
    sweet_update,
)


@click.group()
@click.option("--user", envvar="SWEETSHOP_USER", default=None, help="Act as this user.")
@click.option("--log-level", default=None, help="Override the configured log level.")
@click.pass_context
def cli(ctx: click.Context, user: str | None, log_level: str | None) -> None:
    """Sweet Shop catalog, stock and shop assistant."""
    configure_logging(log_level)
    ctx.ensure_object(dict)
    ctx.obj["user"] = user


@cli.group()
def sweet() -> None:
    """Manage the sweet catalog."""


@cli.group()
def stock() -> None:
    """Purchase and restock sweets."""


# Register subcommands
sweet.add_command(sweet_add)
sweet.add_command(sweet_update)
sweet.add_command(sweet_delete)
sweet.add_command(sweet_list)
sweet.add_command(sweet_categories)
stock.add_command(stock_purchase)
stock.add_command(stock_restock)
cli.add_command(seed)
cli.add_command(chat)
