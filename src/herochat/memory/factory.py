"""Factory for creating conversation store backends."""

from typing import Any

from .base import ConversationStore


def create_conversation_store(
    backend: str = "json",
    **kwargs: Any
) -> ConversationStore:
    """Create a conversation store backend.

    Args:
        backend: Backend type ("json", "sqlite" or "memory")
        **kwargs: Backend-specific configuration
            For json:
                - path: str | Path (default: 'conversations.json')
            For sqlite:
                - path: str | Path (default: 'conversations.db')
            For memory:
                - records: list[ConversationRecord] | None

    Returns:
        ConversationStore instance

    Raises:
        ValueError: If backend type is not supported

    Example:
        >>> store = create_conversation_store("json", path="conversations.json")
        >>> history = await store.load()
    """
    if backend == "json":
        from .json_file import JSONFileConversationStore
        return JSONFileConversationStore(**kwargs)

    elif backend == "sqlite":
        from .sqlite import SQLiteConversationStore
        return SQLiteConversationStore(**kwargs)

    elif backend == "memory":
        from .in_memory import InMemoryConversationStore
        return InMemoryConversationStore(**kwargs)

    raise ValueError(
        f"Unsupported store backend: {backend}. "
        f"Supported backends: json, sqlite, memory"
    )
