from .base import LLMProvider
from .factory import create_llm_provider
from .models import ChatMessage, LLMResponse, Tool
from .providers import HerokuProvider
from .stream import DecodedStream, FrameKind, StreamFrame, decode_stream, iter_frames, parse_event_line

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "ChatMessage",
    "LLMResponse",
    "Tool",
    "HerokuProvider",
    "DecodedStream",
    "FrameKind",
    "StreamFrame",
    "decode_stream",
    "iter_frames",
    "parse_event_line",
]
