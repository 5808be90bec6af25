"""Terminal rendering of conversation records.

Record text is escaped before printing so that brackets in prompts or
responses are never taken for Rich markup.
"""

from rich.console import Console
from rich.markup import escape

from .memory.models import ConversationRecord


def record_header(record: ConversationRecord, current: bool = False) -> str:
    """Build the markup header line for a record."""
    label = "Current Conversation" if current else "Conversation"
    return (
        f"[cyan]{label} {record.id} ({escape(record.timestamp)}) "
        f"\\[Tag: {escape(record.tag)}]:[/cyan]"
    )


def render_record(console: Console, record: ConversationRecord, current: bool = False) -> None:
    """Print one record: header, prompt and response."""
    if current:
        console.print()
    console.print(record_header(record, current=current))
    console.print(f"  Prompt: {escape(record.prompt)}")
    console.print(f"  Response: {escape(record.response)}")


def empty_history_message(tag: str = "") -> str:
    """Warning shown when there is nothing to display."""
    if tag:
        return f"No conversations found with tag '{escape(tag)}'."
    return "No history found."


def render_history(console: Console, records: list[ConversationRecord], tag: str = "") -> int:
    """Print every record of a (filtered) history.

    Args:
        console: Console to print to
        records: Records to show, in stored order
        tag: Tag the records were filtered by (for the empty message)

    Returns:
        Number of records printed
    """
    if not records:
        console.print(f"[yellow]{empty_history_message(tag)}[/yellow]")
        return 0

    for record in records:
        render_record(console, record)
        console.print()
    return len(records)
