from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from .models import ChatMessage, LLMResponse


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    This module hides the design decision of which inference endpoint is used.
    Implementations must handle provider-specific details like:
    - HTTP client setup and authentication
    - Request body and header composition
    - Mapping transport and status failures onto herochat errors

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            response = await provider.chat_completion(messages)
        # Automatically cleaned up
    """

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        on_chunk: Callable[[str], None] | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion from a streamed response.

        Args:
            messages: List of chat messages forming the conversation history
            model: Model to use (None uses provider's default)
            on_chunk: Optional callback receiving each content piece as it arrives
            **kwargs: Provider-specific parameters

        Returns:
            LLMResponse with the full accumulated content (possibly empty)

        Raises:
            TransportError: If the request cannot be sent
            UpstreamError: If the endpoint answers with a non-success status
            StreamReadError: If the response body fails mid-read
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def __aenter__(self) -> "LLMProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup."""
        await self.close()
