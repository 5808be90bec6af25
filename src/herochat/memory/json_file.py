"""JSON file conversation store backend.

Keeps the whole history in a single pretty-printed JSON array and
rewrites it atomically (temp file + rename) on every save.
"""

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from ..config import DEFAULT_JSON_PATH
from ..errors import StoreDecodeError, StoreIOError
from .base import ConversationStore
from .models import ConversationRecord, RecordList

logger = logging.getLogger(__name__)


def encode_records(records: list[ConversationRecord]) -> str:
    """Serialize records to the persisted JSON form (2-space indent, no trailing newline)."""
    return json.dumps([record.to_document() for record in records], indent=2, ensure_ascii=False)


def decode_records(data: bytes | str) -> list[ConversationRecord]:
    """Parse the persisted JSON form.

    A ``null`` document is treated as an empty history.

    Raises:
        StoreDecodeError: If the data is not a JSON array of valid records
    """
    if data.strip() in ("null", b"null"):
        return []
    try:
        return RecordList.validate_json(data, by_name=False)
    except ValidationError as e:
        raise StoreDecodeError(f"Invalid conversation history: {e}") from e


class JSONFileConversationStore(ConversationStore):
    """JSON-file-backed conversation store.

    The file is created on the first save; a missing file loads as an
    empty history.
    """

    def __init__(self, path: str | Path = DEFAULT_JSON_PATH):
        self._path = Path(path)

    async def connect(self) -> None:
        """Nothing to open; the file is read on every load."""
        pass

    async def disconnect(self) -> None:
        """Nothing to close."""
        pass

    async def load(self) -> list[ConversationRecord]:
        if not self._path.exists():
            logger.debug("No history file at %s, starting empty", self._path)
            return []

        try:
            data = self._path.read_bytes()
        except OSError as e:
            raise StoreIOError(f"Failed to read {self._path}: {e}") from e

        records = decode_records(data)
        logger.debug("Loaded %d records from %s", len(records), self._path)
        return records

    async def save(self, records: list[ConversationRecord]) -> None:
        text = encode_records(records)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            if self._path.parent != Path("."):
                self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(text, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            if tmp_path.exists():
                tmp_path.unlink()
            raise StoreIOError(f"Failed to write {self._path}: {e}") from e
        logger.debug("Saved %d records to %s", len(records), self._path)

    @property
    def backend_type(self) -> str:
        return "json"

    @property
    def path(self) -> Path:
        return self._path
