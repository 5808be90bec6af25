"""Configuration for herochat.

Centralizes defaults, environment variable names and the settings model
used to reach the inference endpoint.
"""

import logging
import os
from collections.abc import Mapping

from pydantic import BaseModel, Field

from .errors import ConfigError

# Environment variables
ENV_BASE_URL = "INFERENCE_URL"
ENV_API_KEY = "INFERENCE_KEY"
ENV_MODEL = "INFERENCE_MODEL"
ENV_TIMEOUT = "INFERENCE_TIMEOUT"
ENV_STORE = "HEROCHAT_STORE"
ENV_HISTORY_PATH = "HEROCHAT_HISTORY"

# Inference defaults
DEFAULT_BASE_URL = "https://eu.inference.heroku.com"
DEFAULT_MODEL = "claude-4-sonnet"
DEFAULT_TIMEOUT = 120.0  # Seconds; 0 disables the deadline
AGENTS_PATH = "/v1/agents/heroku"

# Store defaults
DEFAULT_STORE_BACKEND = "json"
DEFAULT_JSON_PATH = "conversations.json"
DEFAULT_SQLITE_PATH = "conversations.db"


class LogLevel:
    """Maps the CLI's log level names onto stdlib logging levels."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def from_string(cls, level_str: str | None) -> int:
        """Convert string to log level. Returns WARNING if missing or invalid."""
        if not level_str:
            return cls.WARNING
        return cls._from_string.get(level_str.lower(), cls.WARNING)


class InferenceSettings(BaseModel):
    """Everything needed to reach the inference endpoint."""

    api_key: str = Field(description="Bearer credential for the endpoint")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Endpoint base URL")
    model: str = Field(default=DEFAULT_MODEL, description="Model identifier sent in each request")
    timeout: float | None = Field(
        default=DEFAULT_TIMEOUT,
        description="Request deadline in seconds (None for no deadline)"
    )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "InferenceSettings":
        """Resolve settings from the environment.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Settings with defaults applied for optional values

        Raises:
            ConfigError: If the credential is absent or the timeout is not a number
        """
        env = os.environ if environ is None else environ

        api_key = (env.get(ENV_API_KEY) or "").strip()
        if not api_key:
            raise ConfigError(f"{ENV_API_KEY} not configured")

        raw_timeout = env.get(ENV_TIMEOUT)
        timeout: float | None = DEFAULT_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigError(f"{ENV_TIMEOUT} must be a number of seconds, got {raw_timeout!r}") from None
            if timeout <= 0:
                timeout = None

        return cls(
            api_key=api_key,
            base_url=env.get(ENV_BASE_URL) or DEFAULT_BASE_URL,
            model=env.get(ENV_MODEL) or DEFAULT_MODEL,
            timeout=timeout,
        )
