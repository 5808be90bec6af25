"""Tag-scoped replay strategies."""

from collections.abc import Sequence

from ..llm.models import ChatMessage
from ..memory.models import ConversationRecord
from .base import ContextStrategy


class TagReplayContext(ContextStrategy):
    """Replays every earlier turn with the same tag.

    Untagged requests carry no history. Tagged requests resend the full
    tagged history on every turn, so request size grows without bound.
    """

    def build(
        self,
        history: Sequence[ConversationRecord],
        tag: str,
        prompt: str
    ) -> list[ChatMessage]:
        if not tag:
            return self._replay([], prompt)
        return self._replay([r for r in history if r.tag == tag], prompt)

    @property
    def name(self) -> str:
        return "replay"


class WindowedReplayContext(ContextStrategy):
    """Replays only the most recent ``max_turns`` turns with the same tag."""

    def __init__(self, max_turns: int = 10):
        if max_turns < 1:
            raise ValueError(f"max_turns must be at least 1, got {max_turns}")
        self._max_turns = max_turns

    def build(
        self,
        history: Sequence[ConversationRecord],
        tag: str,
        prompt: str
    ) -> list[ChatMessage]:
        if not tag:
            return self._replay([], prompt)
        tagged = [r for r in history if r.tag == tag]
        return self._replay(tagged[-self._max_turns:], prompt)

    @property
    def name(self) -> str:
        return "window"

    @property
    def max_turns(self) -> int:
        return self._max_turns
