"""SQLite conversation store backend.

Provides persistent conversation storage using a SQLite database.
Uses aiosqlite for async access.
"""

import logging
import sqlite3
from pathlib import Path

import aiosqlite
from pydantic import ValidationError

from ..config import DEFAULT_SQLITE_PATH
from ..errors import StoreDecodeError, StoreIOError
from .base import ConversationStore
from .models import ConversationRecord

logger = logging.getLogger(__name__)


class SQLiteConversationStore(ConversationStore):
    """SQLite-backed conversation store.

    One row per turn, keyed by ``conversation_id``. Appends insert a single
    row inside a transaction instead of rewriting the table.
    """

    def __init__(self, path: str | Path = DEFAULT_SQLITE_PATH):
        self._db_path = Path(path)
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open the database and create the schema if needed."""
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = await aiosqlite.connect(self._db_path)
            await self._create_schema()
        except (OSError, sqlite3.Error) as e:
            raise StoreIOError(f"Failed to open {self._db_path}: {e}") from e

    async def _create_schema(self) -> None:
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS conversations (
                conversation_id INTEGER PRIMARY KEY,
                prompt TEXT NOT NULL,
                response TEXT NOT NULL,
                timestamp TEXT NOT NULL,
                tag TEXT NOT NULL DEFAULT ''
            )
        """)
        await self._connection.commit()

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    def _require_connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise StoreIOError(f"Store at {self._db_path} is not connected")
        return self._connection

    async def load(self) -> list[ConversationRecord]:
        connection = self._require_connection()
        try:
            async with connection.execute(
                """
                SELECT conversation_id, prompt, response, timestamp, tag
                FROM conversations
                ORDER BY conversation_id ASC
                """
            ) as cursor:
                rows = await cursor.fetchall()
        except sqlite3.Error as e:
            raise StoreIOError(f"Failed to read {self._db_path}: {e}") from e

        try:
            records = [
                ConversationRecord(
                    id=row[0],
                    prompt=row[1],
                    response=row[2],
                    timestamp=row[3],
                    tag=row[4],
                )
                for row in rows
            ]
        except ValidationError as e:
            raise StoreDecodeError(f"Invalid row in {self._db_path}: {e}") from e

        logger.debug("Loaded %d records from %s", len(records), self._db_path)
        return records

    async def save(self, records: list[ConversationRecord]) -> None:
        connection = self._require_connection()
        try:
            await connection.execute("DELETE FROM conversations")
            await connection.executemany(
                """
                INSERT INTO conversations
                (conversation_id, prompt, response, timestamp, tag)
                VALUES (?, ?, ?, ?, ?)
                """,
                [(r.id, r.prompt, r.response, r.timestamp, r.tag) for r in records]
            )
            await connection.commit()
        except sqlite3.Error as e:
            await connection.rollback()
            raise StoreIOError(f"Failed to write {self._db_path}: {e}") from e

    async def append_and_save(self, prompt: str, response: str, tag: str = "") -> ConversationRecord:
        connection = self._require_connection()
        try:
            async with connection.execute("SELECT COUNT(*) FROM conversations") as cursor:
                row = await cursor.fetchone()
            record = self._new_record(row[0] + 1, prompt, response, tag)

            await connection.execute(
                """
                INSERT INTO conversations
                (conversation_id, prompt, response, timestamp, tag)
                VALUES (?, ?, ?, ?, ?)
                """,
                (record.id, record.prompt, record.response, record.timestamp, record.tag)
            )
            await connection.commit()
        except sqlite3.Error as e:
            await connection.rollback()
            raise StoreIOError(f"Failed to write {self._db_path}: {e}") from e

        logger.debug("Appended conversation %d to %s", record.id, self._db_path)
        return record

    @property
    def backend_type(self) -> str:
        return "sqlite"

    @property
    def db_path(self) -> Path:
        return self._db_path
