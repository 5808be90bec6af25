"""Error taxonomy for herochat.

Every error a command can fail with derives from HerochatError, so the CLI
boundary can report them uniformly. None of them are retried.
"""


class HerochatError(Exception):
    """Base class for herochat errors."""


class ConfigError(HerochatError):
    """Required configuration is missing or invalid (no network attempt made)."""


class InferenceError(HerochatError):
    """Base class for failures talking to the inference endpoint."""


class TransportError(InferenceError):
    """The request could not be sent."""

    def __init__(self, message: str):
        super().__init__(f"Failed to call endpoint: {message}")


class UpstreamError(InferenceError):
    """The endpoint answered with a non-success status."""

    def __init__(self, status: int, body: str):
        super().__init__(f"Response status {status}: {body}")
        self.status = status
        self.body = body


class StreamReadError(InferenceError):
    """The response body failed while being read."""

    def __init__(self, message: str):
        super().__init__(f"Failed to read stream: {message}")


class EmptyResponseError(InferenceError):
    """The stream finished without any content."""

    def __init__(self, message: str = "Empty response from model; check prompt or add-on configuration"):
        super().__init__(message)


class StoreError(HerochatError):
    """Base class for conversation store failures."""


class StoreIOError(StoreError):
    """The backing resource could not be read or written."""


class StoreDecodeError(StoreError):
    """The backing resource does not hold a valid record list."""
