"""Intermediate data models for the ingestion pipeline."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DocumentMetadata(BaseModel):
    """Title and author detected in the leading lines of a manuscript.

    ``consumed_lines`` holds the indices (into the line list the extractor
    was given) that belong to metadata: the front-matter block, the title
    line and the author line. The segmenter never treats them as body text.
    """

    title: str | None = None
    author: str | None = None
    front_matter: tuple[int, int] | None = None  # inclusive line range, delimiters included
    consumed_lines: set[int] = Field(default_factory=set)


class StorageInfo(BaseModel):
    """Summary of the local novel library."""

    novels: int = 0
    size_bytes: int = 0

    @property
    def size_mb(self) -> str:
        return f"{self.size_bytes / (1024 * 1024):.2f} MB"
