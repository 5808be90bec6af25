from typing import Any

from ..errors import ConfigError
from .base import LLMProvider
from .providers import HerokuProvider


def create_llm_provider(provider: str = "heroku", **config: Any) -> LLMProvider:
    """Create an LLM provider instance.

    This factory function hides the instantiation logic for providers.

    Args:
        provider: Provider type ('heroku')
        **config: Provider-specific configuration
            For Heroku:
                - api_key: str (required)
                - base_url: str (default: 'https://eu.inference.heroku.com')
                - model: str (default: 'claude-4-sonnet')
                - timeout: float | None (default: 120.0)
                - tools: list[Tool] | None

    Returns:
        Initialized LLM provider instance

    Raises:
        ConfigError: If the credential is missing or blank
        ValueError: If provider type is not supported

    Examples:
        >>> provider = create_llm_provider(
        ...     "heroku",
        ...     api_key="inf-...",
        ...     model="claude-4-sonnet"
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower == "heroku":
        if not config.get("api_key"):
            raise ConfigError("Heroku provider requires 'api_key' in config")
        return HerokuProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'heroku'"
    )
