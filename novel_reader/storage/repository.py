"""Persistence of novel records keyed by id."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from novel_reader.exceptions import NovelNotFoundError
from novel_reader.models.novel import NovelRecord
from novel_reader.models.parsed import StorageInfo
from novel_reader.storage.database import get_connection, initialize_database

logger = logging.getLogger(__name__)


class NovelRepository(Protocol):
    """Storage of novel records by opaque id."""

    def get(self, novel_id: str) -> NovelRecord | None: ...

    def list(self) -> list[NovelRecord]: ...

    def put(self, novel: NovelRecord) -> NovelRecord: ...

    def delete(self, novel_id: str) -> bool: ...


class SQLiteNovelRepository:
    """Stores each novel record as a JSON document in the ``novels`` table.

    ``put`` applies overwrite-merge semantics: a stored record with the
    same title and author as the incoming one is replaced by it.

    Args:
        db_path: Path to the SQLite database file; the schema is created if missing.
    """

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = db_path
        initialize_database(db_path)

    def get(self, novel_id: str) -> NovelRecord | None:
        conn = get_connection(self._db_path)
        try:
            row = conn.execute(
                "SELECT data_json FROM novels WHERE id = ?", (novel_id,)
            ).fetchone()
        finally:
            conn.close()

        if row is None:
            return None
        return NovelRecord.model_validate_json(row["data_json"])

    def require(self, novel_id: str) -> NovelRecord:
        """Like ``get`` but raises NovelNotFoundError for unknown ids."""
        novel = self.get(novel_id)
        if novel is None:
            raise NovelNotFoundError(f"Novel not found: {novel_id}")
        return novel

    def list(self) -> list[NovelRecord]:
        conn = get_connection(self._db_path)
        try:
            rows = conn.execute(
                "SELECT data_json FROM novels ORDER BY created_at, rowid"
            ).fetchall()
        finally:
            conn.close()
        return [NovelRecord.model_validate_json(row["data_json"]) for row in rows]

    def put(self, novel: NovelRecord) -> NovelRecord:
        """Insert or update a novel, replacing any stored copy of the same novel.

        Args:
            novel: The record to store.

        Returns:
            The stored record.
        """
        conn = get_connection(self._db_path)
        try:
            replaced = conn.execute(
                "DELETE FROM novels WHERE title = ? AND author = ? AND id != ?",
                (novel.title, novel.author, novel.id),
            ).rowcount
            if replaced:
                logger.info(
                    "Replacing %d stored copies of '%s' by %s",
                    replaced,
                    novel.title,
                    novel.author,
                )

            conn.execute(
                """
                INSERT INTO novels
                    (id, title, author, source_format, chapter_count, data_json, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    title = excluded.title,
                    author = excluded.author,
                    source_format = excluded.source_format,
                    chapter_count = excluded.chapter_count,
                    data_json = excluded.data_json,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (
                    novel.id,
                    novel.title,
                    novel.author,
                    novel.source_format,
                    len(novel.chapters),
                    novel.model_dump_json(),
                    novel.created_at.isoformat(),
                ),
            )
            conn.commit()
        finally:
            conn.close()
        return novel

    def delete(self, novel_id: str) -> bool:
        conn = get_connection(self._db_path)
        try:
            deleted = conn.execute(
                "DELETE FROM novels WHERE id = ?", (novel_id,)
            ).rowcount
            conn.commit()
        finally:
            conn.close()

        if deleted:
            logger.info("Deleted novel %s", novel_id)
        return bool(deleted)

    def update_progress(self, novel_id: str, chapter_index: int) -> NovelRecord:
        """Record the last chapter read for a stored novel.

        Args:
            novel_id: Id of the stored novel.
            chapter_index: Zero-based chapter index.

        Returns:
            The updated record.

        Raises:
            NovelNotFoundError: If no novel has this id.
            IndexError: If chapter_index is out of range.
        """
        novel = self.require(novel_id)
        if not 0 <= chapter_index < len(novel.chapters):
            raise IndexError(
                f"Chapter index {chapter_index} out of range for '{novel.title}'"
            )
        novel.last_read_chapter = chapter_index
        return self.put(novel)

    def storage_info(self) -> StorageInfo:
        conn = get_connection(self._db_path)
        try:
            row = conn.execute(
                "SELECT COUNT(*) AS novels, "
                "COALESCE(SUM(LENGTH(CAST(data_json AS BLOB))), 0) AS size_bytes "
                "FROM novels"
            ).fetchone()
        finally:
            conn.close()
        return StorageInfo(novels=row["novels"], size_bytes=row["size_bytes"])

    def clear(self) -> int:
        """Delete every stored novel and return how many were removed."""
        conn = get_connection(self._db_path)
        try:
            deleted = conn.execute("DELETE FROM novels").rowcount
            conn.commit()
        finally:
            conn.close()

        logger.info("Cleared %d novels", deleted)
        return deleted
