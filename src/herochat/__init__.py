"""
Herochat: a tagged, streaming chat client with a browsable conversation history.

Each sub-package hides one design decision: how history is stored, how
context is rebuilt from it, how the endpoint is called and its stream
decoded, and how history is navigated.
"""

__version__ = "0.1.0"

from .client import InferenceClient
from .context import ContextStrategy, TagReplayContext, WindowedReplayContext, create_context_strategy
from .errors import (
    ConfigError,
    EmptyResponseError,
    HerochatError,
    InferenceError,
    StoreDecodeError,
    StoreError,
    StoreIOError,
    StreamReadError,
    TransportError,
    UpstreamError,
)
from .memory import ConversationRecord, ConversationStore, create_conversation_store, filter_by_tag

__all__ = [
    "ConfigError",
    "ContextStrategy",
    "ConversationRecord",
    "ConversationStore",
    "EmptyResponseError",
    "HerochatError",
    "InferenceClient",
    "InferenceError",
    "StoreDecodeError",
    "StoreError",
    "StoreIOError",
    "StreamReadError",
    "TagReplayContext",
    "TransportError",
    "UpstreamError",
    "WindowedReplayContext",
    "create_context_strategy",
    "create_conversation_store",
    "filter_by_tag",
]
