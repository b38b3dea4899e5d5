"""Novel and chapter data models."""

from datetime import datetime
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field

SourceFormat = Literal["plaintext", "markdown"]

FILE_EXTENSIONS: dict[str, str] = {
    "plaintext": ".txt",
    "markdown": ".md",
}


class Chapter(BaseModel):
    """A titled, ordered segment of a novel's body text.

    For Markdown novels ``content`` holds rendered markup; for plain-text
    novels it holds the raw lines joined by newlines and is rendered at
    display time.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str
    content: str = ""
    index: int = 0


class NovelRecord(BaseModel):
    """A parsed manuscript together with its reading state."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str
    author: str
    chapters: list[Chapter] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    last_read_chapter: int = 0
    source_format: SourceFormat = "plaintext"

    @property
    def file_extension(self) -> str:
        return FILE_EXTENSIONS[self.source_format]

    def same_novel(self, other: "NovelRecord") -> bool:
        """Two records describe the same novel iff title and author match exactly."""
        return self.title == other.title and self.author == other.author
