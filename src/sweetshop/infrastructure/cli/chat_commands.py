"""CLI command for the shop assistant."""

from __future__ import annotations

import click

from sweetshop.application.chat_assistant import WELCOME, ChatTranscript, reply
from sweetshop.domain.exceptions import DomainException
from sweetshop.infrastructure.cli.context import current_shop


@click.command("chat")
@click.option("--message", "-m", default=None, help="Ask one question and exit.")
def chat(message: str | None) -> None:
    """Talk to the shop assistant. Empty line or Ctrl-D quits."""
    catalog = current_shop().catalog

    try:
        if message is not None:
            click.echo(reply(message, catalog.search()))
            return

        transcript = ChatTranscript()
        click.echo(WELCOME)
        while True:
            text = click.prompt("you", default="", show_default=False)
            if not text.strip():
                break
            # fresh catalog each turn so stock changes show up
            click.echo(transcript.send(text, catalog.search()))
    except (click.Abort, EOFError):
        click.echo()
    except DomainException as exc:
        raise click.ClickException(str(exc))
