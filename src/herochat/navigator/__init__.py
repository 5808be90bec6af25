"""Interactive navigation over conversation history."""

from .session import run_navigation
from .state import NavigationEvent, NavigationOutcome, Navigator

__all__ = [
    "NavigationEvent",
    "NavigationOutcome",
    "Navigator",
    "run_navigation",
]
