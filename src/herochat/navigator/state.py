"""Cursor state machine over a filtered view of the history.

The machine is pure: it consumes one command line at a time and reports
what happened, leaving all terminal I/O to the caller.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ..memory.models import ConversationRecord

USAGE = "Use 'next', 'previous', 'select <ID>', or 'back' to exit navigation."
PROMPT = "Navigate (next/previous/select <ID>/back): "

MSG_AT_MOST_RECENT = "You are at the most recent conversation."
MSG_AT_FIRST = "You are at the first conversation."
MSG_INVALID_ID = "Invalid ID. Use a valid number."
MSG_NOT_FOUND = "Invalid ID for the selected tag. Use a number from the listed IDs."
MSG_INVALID_COMMAND = "Invalid command. Use 'next', 'previous', 'select <ID>', or 'back'."

# Plain ASCII decimal, optionally signed
_ID_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)


class NavigationOutcome(str, Enum):
    """Result of handling one command."""

    MOVED = "moved"
    BOUNDARY = "boundary"                # Already at the first/last record
    SELECTED = "selected"
    INVALID_ID = "invalid_id"            # select with a non-numeric argument
    NOT_FOUND = "not_found"              # select with an id outside the view
    INVALID_COMMAND = "invalid_command"
    EXIT = "exit"

    @property
    def is_error(self) -> bool:
        return self in (
            NavigationOutcome.INVALID_ID,
            NavigationOutcome.NOT_FOUND,
            NavigationOutcome.INVALID_COMMAND,
        )


@dataclass(frozen=True)
class NavigationEvent:
    """What a command did and where the cursor ended up."""

    outcome: NavigationOutcome
    index: int
    message: str = ""


class Navigator:
    """Cursor over a non-empty view of conversation records.

    The cursor starts on the most recent record and never leaves
    ``[0, len(view) - 1]``.
    """

    def __init__(self, view: Sequence[ConversationRecord]):
        if not view:
            raise ValueError("Cannot navigate an empty history view")
        self._view = list(view)
        self._index = len(self._view) - 1
        self._finished = False

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> ConversationRecord:
        return self._view[self._index]

    @property
    def view(self) -> list[ConversationRecord]:
        return list(self._view)

    @property
    def finished(self) -> bool:
        """True once 'back' has been handled."""
        return self._finished

    def handle(self, line: str) -> NavigationEvent:
        """Apply one command line.

        Args:
            line: Raw input line (surrounding whitespace is ignored)

        Returns:
            NavigationEvent describing the transition
        """
        command = line.strip()

        if command == "back":
            self._finished = True
            return self._event(NavigationOutcome.EXIT)

        if command == "next":
            if self._index < len(self._view) - 1:
                self._index += 1
                return self._event(NavigationOutcome.MOVED)
            return self._event(NavigationOutcome.BOUNDARY, MSG_AT_MOST_RECENT)

        if command == "previous":
            if self._index > 0:
                self._index -= 1
                return self._event(NavigationOutcome.MOVED)
            return self._event(NavigationOutcome.BOUNDARY, MSG_AT_FIRST)

        if command.startswith("select "):
            return self._select(command[len("select "):])

        return self._event(NavigationOutcome.INVALID_COMMAND, MSG_INVALID_COMMAND)

    def _select(self, argument: str) -> NavigationEvent:
        if not _ID_PATTERN.fullmatch(argument):
            return self._event(NavigationOutcome.INVALID_ID, MSG_INVALID_ID)
        record_id = int(argument)

        for i, record in enumerate(self._view):
            if record.id == record_id:
                self._index = i
                return self._event(NavigationOutcome.SELECTED)

        return self._event(NavigationOutcome.NOT_FOUND, MSG_NOT_FOUND)

    def _event(self, outcome: NavigationOutcome, message: str = "") -> NavigationEvent:
        return NavigationEvent(outcome=outcome, index=self._index, message=message)
