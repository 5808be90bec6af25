"""Data models for the conversation store.

These models define the structure of stored conversation turns,
independent of the storage backend used.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


def rfc3339_now() -> str:
    """Current local time as an RFC 3339 string with second precision."""
    return datetime.now().astimezone().replace(microsecond=0).isoformat()


class ConversationRecord(BaseModel):
    """Record of a single prompt/response turn.

    Serialized with the ``conversation_id`` key for the identifier and
    without ``tag`` when the turn is untagged.
    """

    # Keyword construction may use `id`; persisted documents must use the alias
    model_config = ConfigDict(validate_by_alias=True, validate_by_name=True)

    id: int = Field(alias="conversation_id", ge=1, description="Position-based identifier, starting at 1")
    prompt: str = Field(description="The user's prompt")
    response: str = Field(description="The model's response")
    timestamp: str = Field(default="", description="RFC 3339 creation time, kept verbatim")
    tag: str = Field(default="", description="Grouping label; empty means untagged")

    def to_document(self) -> dict[str, Any]:
        """Convert to the persisted dict form (stable key order, empty tag omitted)."""
        document = self.model_dump(by_alias=True)
        if not self.tag:
            del document["tag"]
        return document


RecordList = TypeAdapter(list[ConversationRecord])


def filter_by_tag(records: Iterable[ConversationRecord], tag: str = "") -> list[ConversationRecord]:
    """Select the records carrying ``tag``, or all records when ``tag`` is empty.

    Args:
        records: Records in stored order
        tag: Tag to filter by

    Returns:
        Matching records, in stored order
    """
    if not tag:
        return list(records)
    return [record for record in records if record.tag == tag]
