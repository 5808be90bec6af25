"""Context reconstruction for multi-turn requests."""

from .base import ContextStrategy
from .factory import create_context_strategy
from .replay import TagReplayContext, WindowedReplayContext

__all__ = [
    "ContextStrategy",
    "TagReplayContext",
    "WindowedReplayContext",
    "create_context_strategy",
]
