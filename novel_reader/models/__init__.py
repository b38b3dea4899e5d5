"""Data models for the Novel Reader application."""

from novel_reader.models.novel import Chapter, NovelRecord, SourceFormat
from novel_reader.models.parsed import DocumentMetadata, StorageInfo

__all__ = [
    "Chapter",
    "DocumentMetadata",
    "NovelRecord",
    "SourceFormat",
    "StorageInfo",
]
