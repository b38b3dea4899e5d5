"""Local persistence of novel records."""

from novel_reader.storage.database import get_connection, initialize_database
from novel_reader.storage.repository import NovelRepository, SQLiteNovelRepository

__all__ = [
    "NovelRepository",
    "SQLiteNovelRepository",
    "get_connection",
    "initialize_database",
]
