from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """Represents a chat message in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(description="Role of the message sender: 'user' or 'assistant'")
    content: str = Field(description="Content of the message")


class Tool(BaseModel):
    """A tool the agent endpoint may call on the model's behalf."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(default="mcp", description="Tool kind")
    name: str = Field(description="Tool name as registered with the endpoint")


class LLMResponse(BaseModel):
    """Response from an LLM provider."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Generated text content")
    model: str = Field(description="Model that generated the response")
    finish_reason: str | None = Field(
        default=None,
        description="Last finish reason reported by the stream"
    )
