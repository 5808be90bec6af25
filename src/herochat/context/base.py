"""Abstract base class for context strategies.

A context strategy decides which earlier turns are replayed to the model
alongside a new prompt. Keeping it behind this interface lets the
inference client stay unaware of the replay policy.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ..llm.models import ChatMessage
from ..memory.models import ConversationRecord


class ContextStrategy(ABC):
    """Builds the ordered message list sent with a new prompt."""

    @abstractmethod
    def build(
        self,
        history: Sequence[ConversationRecord],
        tag: str,
        prompt: str
    ) -> list[ChatMessage]:
        """Build the request messages.

        Args:
            history: Full store contents, in stored order
            tag: Tag of the new turn ("" for a single-turn request)
            prompt: The new prompt

        Returns:
            Messages in request order, ending with the new user prompt
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the strategy identifier."""

    @staticmethod
    def _replay(records: Sequence[ConversationRecord], prompt: str) -> list[ChatMessage]:
        messages: list[ChatMessage] = []
        for record in records:
            messages.append(ChatMessage(role="user", content=record.prompt))
            messages.append(ChatMessage(role="assistant", content=record.response))
        messages.append(ChatMessage(role="user", content=prompt))
        return messages
