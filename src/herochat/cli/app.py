"""Main CLI application using Typer."""
import asyncio
from typing import NoReturn

import click
import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from typer.core import TyperGroup

from ..client import InferenceClient
from ..config import LogLevel
from ..errors import HerochatError, StoreError
from ..formatting import render_history
from ..log import configure_logging
from ..memory import ConversationRecord, filter_by_tag
from ..navigator import run_navigation
from ..navigator.state import PROMPT
from .providers import get_context, get_llm, get_settings, get_store

# Load environment variables
load_dotenv()


class DefaultChatGroup(TyperGroup):
    """Command group that treats an unknown first word as a chat tag.

    ``herochat <tag> <prompt...>`` is dispatched to ``herochat chat``, and so
    is anything starting with an option other than ``--help``, since the
    options all belong to the subcommands.
    """

    default_command = "chat"

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if args and args[0] not in self.commands and args[0] not in ctx.help_option_names:
            args = [self.default_command, *args]
        return super().parse_args(ctx, args)


# Create Typer app
app = typer.Typer(
    name="herochat",
    cls=DefaultChatGroup,
    help="Chat with Heroku-hosted Claude, keeping a tagged conversation history",
    no_args_is_help=True,
    add_completion=False,
)

# Console for rich output
console = Console()


def _fail(message: str, error: Exception) -> NoReturn:
    console.print(f"[red]{message}: {escape(str(error))}[/red]")
    raise typer.Exit(code=1)


def _print_chunk(chunk: str) -> None:
    console.print(chunk, end="", markup=False, highlight=False)


async def _load_records(store_backend: str | None, history_path: str | None) -> list[ConversationRecord]:
    store = get_store(store_backend, history_path, console)
    try:
        await store.connect()
        return await store.load()
    finally:
        await store.disconnect()


STORE_HELP = "History backend: json, sqlite or memory (env HEROCHAT_STORE)"
PATH_HELP = "History file (env HEROCHAT_HISTORY)"
LOG_HELP = "Log level: debug, info, warning or error"


@app.command()
def chat(
    tag: str = typer.Argument(
        ...,
        help="Conversation tag; earlier turns with this tag are sent as context"
    ),
    prompt: list[str] = typer.Argument(
        ...,
        help="Prompt (remaining words are joined with spaces)"
    ),
    live: bool = typer.Option(
        False,
        "--live/--no-live",
        help="Print the response as it streams in"
    ),
    context: str = typer.Option(
        "replay",
        "--context",
        "-c",
        help="Context strategy: replay (full tagged history) or window"
    ),
    max_turns: int = typer.Option(
        10,
        "--max-turns",
        help="Turns replayed by the window strategy"
    ),
    tools: list[str] | None = typer.Option(
        None,
        "--tool",
        "-t",
        help="MCP tool to enable (repeatable)"
    ),
    store_backend: str | None = typer.Option(None, "--store", "-s", help=STORE_HELP),
    history_path: str | None = typer.Option(None, "--history-path", "-p", help=PATH_HELP),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help=LOG_HELP),
):
    """Send a prompt under a tag and save the exchange."""
    configure_logging(LogLevel.from_string(log_level))

    prompt_text = " ".join(prompt)
    if not prompt_text.strip():
        console.print("[red]Error: prompt must not be empty[/red]")
        raise typer.Exit(code=1)

    settings = get_settings(console)
    strategy = get_context(context, max_turns, console)

    async def _chat():
        store = get_store(store_backend, history_path, console)
        llm = get_llm(settings, tools)

        try:
            try:
                await store.connect()
                client = InferenceClient(store, llm, strategy)
                response = await client.send(
                    prompt_text,
                    tag,
                    on_chunk=_print_chunk if live else None
                )
            except HerochatError as e:
                if live:
                    console.print()
                _fail("Error", e)

            if live:
                console.print()
            else:
                console.print(f"[green]Response:[/green] {escape(response.content)}")

            try:
                record = await store.append_and_save(prompt_text, response.content, tag)
            except StoreError as e:
                _fail("Error saving conversation", e)

            console.print(
                f"[green]Conversation {record.id} saved with tag '{escape(tag)}'[/green]"
            )
        finally:
            await store.disconnect()
            await llm.close()

    asyncio.run(_chat())


@app.command()
def history(
    tag: str = typer.Argument(
        "",
        help="Only show conversations with this tag"
    ),
    store_backend: str | None = typer.Option(None, "--store", "-s", help=STORE_HELP),
    history_path: str | None = typer.Option(None, "--history-path", "-p", help=PATH_HELP),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help=LOG_HELP),
):
    """View conversation history, optionally filtered by tag."""
    configure_logging(LogLevel.from_string(log_level))

    try:
        records = asyncio.run(_load_records(store_backend, history_path))
    except HerochatError as e:
        _fail("Error displaying history", e)

    # An empty store reports "no history" even when a tag was given
    render_history(console, filter_by_tag(records, tag), tag if records else "")


@app.command()
def navigate(
    tag: str = typer.Argument(
        "",
        help="Only navigate conversations with this tag"
    ),
    store_backend: str | None = typer.Option(None, "--store", "-s", help=STORE_HELP),
    history_path: str | None = typer.Option(None, "--history-path", "-p", help=PATH_HELP),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help=LOG_HELP),
):
    """Navigate through conversation history, optionally filtered by tag."""
    configure_logging(LogLevel.from_string(log_level))

    try:
        records = asyncio.run(_load_records(store_backend, history_path))
    except HerochatError as e:
        _fail("Error loading history", e)

    run_navigation(
        filter_by_tag(records, tag),
        read_line=lambda: console.input(f"[magenta]{PROMPT}[/magenta]"),
        console=console,
        tag=tag,
    )


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
