"""Pytest configuration and shared fixtures."""
import logging
import os

import httpx
import pytest

from herochat.memory import ConversationRecord


@pytest.fixture(scope="session")
def inference_key():
    """Return the inference key from environment (for integration tests)."""
    return os.getenv("INFERENCE_KEY")


@pytest.fixture
def sample_records():
    """Three turns across two tags, in stored order."""
    return [
        ConversationRecord(
            id=1,
            prompt="p1",
            response="r1",
            timestamp="2026-10-19T10:00:00+00:00",
            tag="T",
        ),
        ConversationRecord(
            id=2,
            prompt="p2",
            response="r2",
            timestamp="2026-10-19T10:05:00+00:00",
            tag="U",
        ),
        ConversationRecord(
            id=3,
            prompt="p3",
            response="r3",
            timestamp="2026-10-19T10:10:00+00:00",
            tag="T",
        ),
    ]


@pytest.fixture
def history_file(tmp_path):
    """Path for a JSON history file that does not exist yet."""
    return tmp_path / "conversations.json"


@pytest.fixture
def recorded_requests():
    """List that mock transports append their requests to."""
    return []


@pytest.fixture
def streaming_transport(recorded_requests):
    """Build a mock transport answering every request with ``body``."""

    def _make(body: bytes, status_code: int = 200) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return httpx.Response(
                status_code,
                content=body,
                headers={"Content-Type": "text/event-stream"},
            )

        return httpx.MockTransport(handler)

    return _make


@pytest.fixture(autouse=True)
def reset_herochat_logger():
    """Undo CLI logging setup so caplog sees herochat records in every test."""
    yield
    logger = logging.getLogger("herochat")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
