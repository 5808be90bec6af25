"""Factory for creating context strategies."""

from typing import Any

from .base import ContextStrategy
from .replay import TagReplayContext, WindowedReplayContext


def create_context_strategy(name: str = "replay", **config: Any) -> ContextStrategy:
    """Create a context strategy.

    Args:
        name: Strategy name ("replay" or "window")
        **config: Strategy-specific configuration
            For window:
                - max_turns: int (default: 10)

    Returns:
        ContextStrategy instance

    Raises:
        ValueError: If the strategy is not supported or misconfigured
    """
    name_lower = name.lower()

    if name_lower == "replay":
        return TagReplayContext()

    if name_lower == "window":
        return WindowedReplayContext(**config)

    raise ValueError(
        f"Unsupported context strategy: {name}. "
        f"Supported strategies: 'replay', 'window'"
    )
