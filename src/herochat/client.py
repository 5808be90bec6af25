"""Chat turn orchestration.

Ties the store, the context strategy and the LLM provider together for a
single request. Persisting the turn is left to the caller so that a save
failure can be reported separately from the inference result.
"""

import logging
from collections.abc import Callable

from .context import ContextStrategy, TagReplayContext
from .errors import EmptyResponseError
from .llm.base import LLMProvider
from .llm.models import LLMResponse
from .memory.base import ConversationStore

logger = logging.getLogger(__name__)


class InferenceClient:
    """Sends prompts with their tag-scoped context.

    Example:
        client = InferenceClient(store, provider)
        response = await client.send("What next?", tag="project")
        await store.append_and_save("What next?", response.content, "project")
    """

    def __init__(
        self,
        store: ConversationStore,
        provider: LLMProvider,
        context: ContextStrategy | None = None,
    ):
        self._store = store
        self._provider = provider
        self._context = context or TagReplayContext()

    @property
    def context(self) -> ContextStrategy:
        return self._context

    async def send(
        self,
        prompt: str,
        tag: str = "",
        on_chunk: Callable[[str], None] | None = None,
    ) -> LLMResponse:
        """Send one prompt and return the full streamed answer.

        Args:
            prompt: The new prompt
            tag: Conversation tag ("" for a single-turn request)
            on_chunk: Optional callback for each content piece as it arrives

        Returns:
            LLMResponse with non-empty content

        Raises:
            StoreError: If the history cannot be loaded
            InferenceError: If the request fails or yields no content
        """
        history = await self._store.load()
        messages = self._context.build(history, tag, prompt)
        logger.debug(
            "Built %d messages for tag %r using %s context",
            len(messages), tag, self._context.name
        )

        response = await self._provider.chat_completion(messages, on_chunk=on_chunk)
        if not response.content:
            raise EmptyResponseError()
        return response
