import logging
from collections.abc import Callable
from typing import Any

import httpx

from ...config import AGENTS_PATH, DEFAULT_BASE_URL, DEFAULT_MODEL, DEFAULT_TIMEOUT
from ...errors import StreamReadError, TransportError, UpstreamError
from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse, Tool
from ..stream import decode_stream

logger = logging.getLogger(__name__)


class HerokuProvider(LLMProvider):
    """Heroku managed inference (agents endpoint) provider.

    Hidden design decisions:
    - Endpoint path and header set (bearer credential, forwarded protocol)
    - Request body shape, including optional MCP tools
    - Streaming body consumption and error mapping
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        timeout: float | None = DEFAULT_TIMEOUT,
        tools: list[Tool] | None = None,
        **client_kwargs: Any
    ):
        """Initialize Heroku provider.

        Args:
            api_key: Inference key sent as a bearer credential
            base_url: Endpoint base URL
            model: Default model to use
            timeout: Request deadline in seconds (None disables it)
            tools: Tools to advertise with every request
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._tools = list(tools or [])
        self._client = httpx.AsyncClient(timeout=timeout, **client_kwargs)

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    @property
    def url(self) -> str:
        """Get the full agents endpoint URL."""
        return self._base_url + AGENTS_PATH

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "X-Forwarded-Proto": "https",
        }

    def _payload(self, messages: list[ChatMessage], model: str) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": model,
            "messages": [{"role": msg.role, "content": msg.content} for msg in messages],
        }
        if self._tools:
            payload["tools"] = [tool.model_dump() for tool in self._tools]
        return payload

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        on_chunk: Callable[[str], None] | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Send the conversation and accumulate the streamed answer.

        Args:
            messages: Conversation history ending with the new prompt
            model: Model to use (overrides default)
            on_chunk: Optional callback for each content piece
            **kwargs: Extra top-level fields merged into the request body

        Returns:
            LLMResponse with the accumulated content
        """
        model_to_use = model or self._model
        payload = {**self._payload(messages, model_to_use), **kwargs}

        logger.debug("POST %s with %d messages (model=%s)", self.url, len(messages), model_to_use)

        try:
            async with self._client.stream(
                "POST", self.url, json=payload, headers=self._headers()
            ) as response:
                if not response.is_success:
                    body = (await response.aread()).decode("utf-8", errors="replace")
                    raise UpstreamError(response.status_code, body)

                try:
                    decoded = await decode_stream(response.aiter_lines(), on_chunk=on_chunk)
                except (httpx.TransportError, httpx.StreamError) as e:
                    raise StreamReadError(str(e) or type(e).__name__) from e
        except httpx.TransportError as e:
            raise TransportError(str(e) or type(e).__name__) from e

        if decoded.skipped:
            logger.info("Skipped %d malformed stream frames", decoded.skipped)

        return LLMResponse(
            content=decoded.text,
            model=model_to_use,
            finish_reason=decoded.finish_reason,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
