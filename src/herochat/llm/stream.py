"""Server-sent event decoding for streamed completions.

Hides the framing of the endpoint's response body:
- Only lines starting with ``data:`` carry frames
- ``data: [DONE]`` ends the stream
- Every other ``data:`` payload is a JSON chunk with a ``choices`` list

A payload that fails to parse becomes a MALFORMED frame and is skipped, so
one bad frame never aborts the read.
"""

import logging
from collections.abc import AsyncIterable, AsyncIterator, Callable
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ValidationError

from ..errors import StreamReadError

logger = logging.getLogger(__name__)

DATA_PREFIX = "data:"
DONE_SENTINEL = "[DONE]"


class FrameKind(str, Enum):
    """Kinds of decoded stream frames."""

    CHUNK = "chunk"          # Parsed payload (content may be empty)
    DONE = "done"            # End-of-stream sentinel
    MALFORMED = "malformed"  # Payload failed to parse; skip it


class StreamMessage(BaseModel):
    content: str | None = None


class StreamChoice(BaseModel):
    message: StreamMessage | None = None
    finish_reason: str | None = None


class StreamPayload(BaseModel):
    """JSON body of a single ``data:`` frame."""

    choices: list[StreamChoice] | None = None


@dataclass(frozen=True)
class StreamFrame:
    """One decoded ``data:`` line."""

    kind: FrameKind
    content: str = ""
    finish_reason: str | None = None
    raw: str = ""
    error: str | None = None


@dataclass(frozen=True)
class DecodedStream:
    """Accumulated result of a whole stream."""

    text: str
    finish_reason: str | None = None
    skipped: int = 0


def parse_event_line(line: str) -> StreamFrame | None:
    """Decode one line of the event stream.

    Args:
        line: A line of the response body, with or without its newline

    Returns:
        A frame for ``data:`` lines, None for anything else
    """
    if not line.startswith(DATA_PREFIX):
        return None

    data = line[len(DATA_PREFIX):].strip()
    if data == DONE_SENTINEL:
        return StreamFrame(kind=FrameKind.DONE, raw=data)

    try:
        payload = StreamPayload.model_validate_json(data)
    except ValidationError as e:
        return StreamFrame(kind=FrameKind.MALFORMED, raw=data, error=str(e))

    if not payload.choices:
        return StreamFrame(kind=FrameKind.CHUNK, raw=data)

    first = payload.choices[0]
    return StreamFrame(
        kind=FrameKind.CHUNK,
        content=(first.message.content if first.message else None) or "",
        finish_reason=first.finish_reason,
        raw=data,
    )


async def iter_frames(lines: AsyncIterable[str]) -> AsyncIterator[StreamFrame]:
    """Lazily decode frames from an async line source.

    Non-``data:`` lines are dropped, malformed frames are logged and still
    yielded as skip markers, and iteration stops right after ``[DONE]``.

    Raises:
        StreamReadError: If the line source itself fails with an OSError
    """
    try:
        async for line in lines:
            frame = parse_event_line(line)
            if frame is None:
                continue
            if frame.kind is FrameKind.MALFORMED:
                logger.warning("Error parsing line: %s", frame.error)
            yield frame
            if frame.kind is FrameKind.DONE:
                return
    except OSError as e:
        raise StreamReadError(str(e)) from e


async def decode_stream(
    lines: AsyncIterable[str],
    on_chunk: Callable[[str], None] | None = None
) -> DecodedStream:
    """Accumulate a stream into the final response text.

    Args:
        lines: Async iterable of response body lines
        on_chunk: Optional callback invoked with each non-empty content piece

    Returns:
        DecodedStream with the concatenated text in arrival order
    """
    parts: list[str] = []
    finish_reason: str | None = None
    skipped = 0

    async for frame in iter_frames(lines):
        if frame.kind is FrameKind.MALFORMED:
            skipped += 1
        elif frame.kind is FrameKind.CHUNK:
            if frame.finish_reason:
                finish_reason = frame.finish_reason
            if frame.content:
                parts.append(frame.content)
                if on_chunk:
                    on_chunk(frame.content)

    return DecodedStream(text="".join(parts), finish_reason=finish_reason, skipped=skipped)
