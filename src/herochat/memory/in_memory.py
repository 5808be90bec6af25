"""In-memory conversation store backend.

Simple list-based storage for session-only history.
Data is lost when the application exits.
"""

from .base import ConversationStore
from .models import ConversationRecord


class InMemoryConversationStore(ConversationStore):
    """In-memory conversation store (session-only).

    Suitable for testing and scripted use. Records are copied on the way
    in and out so callers cannot mutate the stored history.
    """

    def __init__(self, records: list[ConversationRecord] | None = None):
        self._records: list[ConversationRecord] = [r.model_copy() for r in records or []]

    async def connect(self) -> None:
        """Initialize store (no-op for in-memory)."""
        pass

    async def disconnect(self) -> None:
        """Close store (no-op for in-memory)."""
        pass

    async def load(self) -> list[ConversationRecord]:
        return [r.model_copy() for r in self._records]

    async def save(self, records: list[ConversationRecord]) -> None:
        self._records = [r.model_copy() for r in records]

    @property
    def backend_type(self) -> str:
        return "memory"
