"""Unit tests for server-sent event decoding."""
import json
import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from herochat.errors import StreamReadError
from herochat.llm.stream import FrameKind, decode_stream, iter_frames, parse_event_line

from helpers import aiter_lines, sse_chunk


class TestParseEventLine:
    """Tests for single-line decoding."""

    def test_non_data_lines_are_ignored(self):
        assert parse_event_line("event: message\n") is None
        assert parse_event_line(": keep-alive\n") is None
        assert parse_event_line("\n") is None
        assert parse_event_line("") is None

    def test_prefix_must_start_the_line(self):
        assert parse_event_line('  data: {"choices": []}') is None

    def test_done_sentinel(self):
        frame = parse_event_line("data: [DONE]\n")

        assert frame.kind is FrameKind.DONE

    def test_done_sentinel_without_space(self):
        assert parse_event_line("data:[DONE]").kind is FrameKind.DONE

    def test_chunk_content_and_finish_reason(self):
        frame = parse_event_line(sse_chunk("Hel", finish_reason="stop"))

        assert frame.kind is FrameKind.CHUNK
        assert frame.content == "Hel"
        assert frame.finish_reason == "stop"

    def test_only_first_choice_is_used(self):
        payload = {"choices": [{"message": {"content": "a"}}, {"message": {"content": "b"}}]}

        frame = parse_event_line("data: " + json.dumps(payload))

        assert frame.content == "a"

    def test_no_choices_is_empty_chunk(self):
        frame = parse_event_line('data: {"choices": []}')

        assert frame.kind is FrameKind.CHUNK
        assert frame.content == ""

    def test_null_content_is_empty_chunk(self):
        frame = parse_event_line('data: {"choices": [{"message": {"content": null}}]}')

        assert frame.kind is FrameKind.CHUNK
        assert frame.content == ""

    def test_invalid_json_is_malformed(self):
        frame = parse_event_line("data: {oops")

        assert frame.kind is FrameKind.MALFORMED
        assert frame.raw == "{oops"
        assert frame.error

    def test_wrong_content_type_is_malformed(self):
        frame = parse_event_line('data: {"choices": [{"message": {"content": 5}}]}')

        assert frame.kind is FrameKind.MALFORMED

    @given(st.text())
    def test_never_raises(self, text: str):
        """Property test: decoding any line yields a frame or None, never an error."""
        frame = parse_event_line("data: " + text)

        assert frame is not None


class TestDecodeStream:
    """Tests for whole-stream accumulation."""

    @pytest.mark.asyncio
    async def test_stops_at_done_and_ignores_noise(self):
        lines = [
            "event: x\n",
            'data: {"choices":[{"message":{"content":"Hel"}}]}\n',
            'data: {"choices":[{"message":{"content":"lo"}}]}\n',
            "data: [DONE]\n",
            'data: {"choices":[{"message":{"content":"ignored"}}]}\n',
        ]

        decoded = await decode_stream(aiter_lines(lines))

        assert decoded.text == "Hello"

    @pytest.mark.asyncio
    async def test_malformed_frame_does_not_abort(self, caplog):
        lines = [sse_chunk("a"), "data: {broken", sse_chunk("b")]

        with caplog.at_level(logging.WARNING, logger="herochat.llm.stream"):
            decoded = await decode_stream(aiter_lines(lines))

        assert decoded.text == "ab"
        assert decoded.skipped == 1
        assert "Error parsing line" in caplog.text

    @pytest.mark.asyncio
    async def test_end_of_stream_without_done(self):
        decoded = await decode_stream(aiter_lines([sse_chunk("x"), sse_chunk("y")]))

        assert decoded.text == "xy"

    @pytest.mark.asyncio
    async def test_empty_stream_gives_empty_text(self):
        decoded = await decode_stream(aiter_lines(["data: [DONE]"]))

        assert decoded.text == ""
        assert decoded.finish_reason is None

    @pytest.mark.asyncio
    async def test_last_finish_reason_wins(self):
        lines = [sse_chunk("a"), sse_chunk("", finish_reason="stop")]

        decoded = await decode_stream(aiter_lines(lines))

        assert decoded.finish_reason == "stop"

    @pytest.mark.asyncio
    async def test_on_chunk_sees_pieces_in_order(self):
        seen = []

        await decode_stream(aiter_lines([sse_chunk("a"), sse_chunk(""), sse_chunk("b")]), on_chunk=seen.append)

        assert seen == ["a", "b"]

    @pytest.mark.asyncio
    async def test_source_failure_raises_stream_read_error(self):
        async def failing_lines():
            yield sse_chunk("partial")
            raise ConnectionResetError("peer went away")

        with pytest.raises(StreamReadError, match="peer went away"):
            await decode_stream(failing_lines())


class TestIterFrames:
    """Tests for lazy frame iteration."""

    @pytest.mark.asyncio
    async def test_yields_skip_markers(self):
        lines = ["event: x", sse_chunk("a"), "data: nope", "data: [DONE]", sse_chunk("late")]

        kinds = [frame.kind async for frame in iter_frames(aiter_lines(lines))]

        assert kinds == [FrameKind.CHUNK, FrameKind.MALFORMED, FrameKind.DONE]
