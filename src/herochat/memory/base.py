"""Abstract base class for conversation store backends.

This module defines the interface for conversation history storage.
The abstraction hides:
- Storage format (JSON, SQLite, etc.)
- Persistence mechanism (file, database, in-memory)
- Connection management

Stores are not lock-protected. Two processes writing the same backing
resource race, and the last full rewrite wins.
"""

from abc import ABC, abstractmethod
from typing import Any

from .models import ConversationRecord, rfc3339_now


class ConversationStore(ABC):
    """Abstract conversation store.

    Holds an append-only, ordered list of conversation records whose ids
    equal their 1-based position.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the store backend."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the store backend gracefully."""

    @abstractmethod
    async def load(self) -> list[ConversationRecord]:
        """Load every record, in stored order.

        Returns:
            All records (empty if the backing resource does not exist)

        Raises:
            StoreIOError: If the backing resource exists but cannot be read
            StoreDecodeError: If its content is not a valid record list
        """

    @abstractmethod
    async def save(self, records: list[ConversationRecord]) -> None:
        """Replace the stored records with ``records``.

        Raises:
            StoreIOError: If the backing resource cannot be written
        """

    async def append_and_save(self, prompt: str, response: str, tag: str = "") -> ConversationRecord:
        """Append a new turn and persist the whole history.

        Args:
            prompt: The user's prompt
            response: The model's response
            tag: Grouping label ("" for untagged)

        Returns:
            The stored record

        Raises:
            StoreIOError: If loading or writing fails
            StoreDecodeError: If the current content cannot be decoded
        """
        history = await self.load()
        record = self._new_record(len(history) + 1, prompt, response, tag)
        history.append(record)
        await self.save(history)
        return record

    @staticmethod
    def _new_record(record_id: int, prompt: str, response: str, tag: str) -> ConversationRecord:
        return ConversationRecord(
            id=record_id,
            prompt=prompt,
            response=response,
            timestamp=rfc3339_now(),
            tag=tag,
        )

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    async def __aenter__(self) -> "ConversationStore":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.disconnect()
