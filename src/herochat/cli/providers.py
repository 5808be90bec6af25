"""Provider factory functions for CLI.

Centralizes creation of the store, context strategy and LLM instances from
options and environment variables. Hides configuration details from
command implementations.
"""

import os

import typer
from rich.console import Console
from rich.markup import escape

from ..config import (
    DEFAULT_JSON_PATH,
    DEFAULT_SQLITE_PATH,
    DEFAULT_STORE_BACKEND,
    ENV_HISTORY_PATH,
    ENV_STORE,
    InferenceSettings,
)
from ..context import ContextStrategy, create_context_strategy
from ..errors import ConfigError
from ..llm import LLMProvider, Tool, create_llm_provider
from ..memory import ConversationStore, create_conversation_store

# Default console for output
_console = Console()


def get_settings(console: Console | None = None) -> InferenceSettings:
    """Resolve inference settings from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        Inference settings

    Raises:
        SystemExit: If INFERENCE_KEY is not set

    Environment variables:
        INFERENCE_KEY: Inference credential (required)
        INFERENCE_URL: Endpoint base URL (default: https://eu.inference.heroku.com)
        INFERENCE_MODEL: Model identifier (default: claude-4-sonnet)
        INFERENCE_TIMEOUT: Deadline in seconds, 0 for none (default: 120)
    """
    con = console or _console
    try:
        return InferenceSettings.from_env()
    except ConfigError as e:
        con.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def get_store(
    backend: str | None = None,
    path: str | None = None,
    console: Console | None = None
) -> ConversationStore:
    """Create the conversation store from options and environment variables.

    Args:
        backend: Store backend (json, sqlite, memory); falls back to HEROCHAT_STORE
        path: Backing file path; falls back to HEROCHAT_HISTORY
        console: Optional Rich console for output

    Returns:
        Conversation store instance (not yet connected)

    Raises:
        SystemExit: If the backend is unknown

    Environment variables:
        HEROCHAT_STORE: Store backend (default: json)
        HEROCHAT_HISTORY: History file (default: conversations.json or conversations.db)
    """
    con = console or _console
    backend_name = (backend or os.getenv(ENV_STORE) or DEFAULT_STORE_BACKEND).lower()
    history_path = path or os.getenv(ENV_HISTORY_PATH)

    try:
        if backend_name == "memory":
            return create_conversation_store("memory")
        if backend_name == "sqlite":
            return create_conversation_store("sqlite", path=history_path or DEFAULT_SQLITE_PATH)
        return create_conversation_store(backend_name, path=history_path or DEFAULT_JSON_PATH)
    except ValueError as e:
        con.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def get_context(
    name: str = "replay",
    max_turns: int = 10,
    console: Console | None = None
) -> ContextStrategy:
    """Create the context strategy selected on the command line.

    Raises:
        SystemExit: If the strategy is unknown or misconfigured
    """
    con = console or _console
    try:
        if name.lower() == "window":
            return create_context_strategy("window", max_turns=max_turns)
        return create_context_strategy(name)
    except ValueError as e:
        con.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def get_llm(settings: InferenceSettings, tools: list[str] | None = None) -> LLMProvider:
    """Create the LLM provider for the resolved settings.

    Args:
        settings: Inference settings
        tools: Names of MCP tools to advertise with the request

    Returns:
        LLM provider instance
    """
    return create_llm_provider(
        "heroku",
        api_key=settings.api_key,
        base_url=settings.base_url,
        model=settings.model,
        timeout=settings.timeout,
        tools=[Tool(name=name) for name in tools or []],
    )
