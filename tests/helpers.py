"""Helpers for building event streams in tests."""
import json
from collections.abc import AsyncIterator, Iterable


async def aiter_lines(lines: Iterable[str]) -> AsyncIterator[str]:
    """Feed a list of lines to code expecting an async line source."""
    for line in lines:
        yield line


def sse_chunk(content: str, finish_reason: str | None = None) -> str:
    """Build one ``data:`` line carrying ``content``."""
    choice = {"message": {"content": content}, "finish_reason": finish_reason}
    return "data: " + json.dumps({"choices": [choice]})


def sse_body(*contents: str, done: bool = True) -> bytes:
    """Build a full event-stream body from content pieces."""
    lines = []
    for content in contents:
        lines.append(sse_chunk(content))
        lines.append("")
    if done:
        lines.append("data: [DONE]")
        lines.append("")
    return "\n".join(lines).encode("utf-8")
