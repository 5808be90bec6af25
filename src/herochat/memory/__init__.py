"""Conversation store module for herochat.

Provides the append-only, tagged conversation history.
"""

from .base import ConversationStore
from .factory import create_conversation_store
from .models import ConversationRecord, filter_by_tag

__all__ = [
    "ConversationRecord",
    "ConversationStore",
    "create_conversation_store",
    "filter_by_tag",
]
