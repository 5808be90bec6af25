"""Terminal driver for the navigator.

Pulls one line at a time from ``read_line`` so a real terminal and a
scripted input source drive exactly the same transitions.
"""

import logging
from collections.abc import Callable, Sequence

from rich.console import Console
from rich.markup import escape

from ..formatting import empty_history_message, render_record
from ..memory.models import ConversationRecord
from .state import USAGE, NavigationOutcome, Navigator

logger = logging.getLogger(__name__)


def run_navigation(
    view: Sequence[ConversationRecord],
    read_line: Callable[[], str],
    console: Console,
    tag: str = "",
) -> Navigator | None:
    """Run the interactive navigation loop until 'back' or end of input.

    Args:
        view: Records to navigate, already filtered by tag
        read_line: Returns the next input line; raises EOFError at end of input
        console: Console for output
        tag: Tag the view was filtered by (for the empty message)

    Returns:
        The navigator in its final state, or None if the view was empty
    """
    if not view:
        console.print(f"[yellow]{empty_history_message(tag)}[/yellow]")
        return None

    navigator = Navigator(view)
    console.print(f"[green]{USAGE}[/green]")

    while True:
        render_record(console, navigator.current, current=True)

        try:
            line = read_line()
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        event = navigator.handle(line)
        logger.debug("Navigator %s -> index %d", event.outcome.value, event.index)

        if event.outcome is NavigationOutcome.EXIT:
            break
        if event.outcome.is_error:
            console.print(f"[red]{escape(event.message)}[/red]")
        elif event.message:
            console.print(f"[yellow]{escape(event.message)}[/yellow]")

    return navigator
