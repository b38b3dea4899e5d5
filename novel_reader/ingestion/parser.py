"""Manuscript parser turning plain-text and Markdown files into novel records."""

import logging
import re
from pathlib import Path

import chardet

from novel_reader.config import ParsingConfig
from novel_reader.exceptions import (
    EmptyInputError,
    NoChaptersFoundError,
    UnsupportedFormatError,
)
from novel_reader.ingestion.metadata import (
    extract_markdown_metadata,
    extract_plaintext_metadata,
)
from novel_reader.ingestion.renderer import render_chapter_body
from novel_reader.ingestion.segmenter import POLICIES, ChapterSegmenter
from novel_reader.models.novel import Chapter, NovelRecord
from novel_reader.models.parsed import DocumentMetadata

logger = logging.getLogger(__name__)

# Supported file extensions mapped to format identifiers
SUPPORTED_FORMATS: dict[str, str] = {
    ".txt": "plaintext",
    ".md": "markdown",
}


class NovelParser:
    """Parses manuscripts into NovelRecord values.

    Plain-text manuscripts keep raw chapter bodies (rendered at display
    time); Markdown manuscripts are rendered during segmentation.

    Args:
        config: ParsingConfig with sentinels, default titles and scan windows.
    """

    def __init__(self, config: ParsingConfig | None = None) -> None:
        self._config = config or ParsingConfig()
        self._segmenters = {
            name: ChapterSegmenter(policy, self._config.default_chapter_title)
            for name, policy in POLICIES.items()
        }

    def parse(self, raw_text: str, source_format: str) -> NovelRecord:
        """Parse manuscript text into a novel record.

        Args:
            raw_text: The whole manuscript.
            source_format: "plaintext" or "markdown".

        Returns:
            A NovelRecord with at least one chapter.

        Raises:
            UnsupportedFormatError: If source_format is not recognized.
            EmptyInputError: If the text has no non-blank lines.
            NoChaptersFoundError: If a plain-text manuscript yields no chapters.
        """
        if source_format not in self._segmenters:
            raise UnsupportedFormatError(f"Unsupported source format: '{source_format}'")
        if not raw_text or not raw_text.strip():
            raise EmptyInputError("Manuscript is empty")

        if source_format == "markdown":
            lines = raw_text.splitlines()
            metadata = extract_markdown_metadata(
                lines, self._config.markdown_metadata_lines
            )
        else:
            lines = [line.strip() for line in raw_text.splitlines() if line.strip()]
            metadata = extract_plaintext_metadata(
                lines, self._config.plaintext_author_lines
            )

        chapters = self._segmenters[source_format].segment(lines, metadata)

        if not chapters and source_format == "markdown":
            chapters = [self._whole_document_chapter(raw_text, lines, metadata)]
        if not chapters:
            raise NoChaptersFoundError("No valid chapters found")

        novel = NovelRecord(
            title=metadata.title or self._config.unknown_title,
            author=metadata.author or self._config.unknown_author,
            chapters=chapters,
            source_format=source_format,  # type: ignore[arg-type]
        )
        logger.info(
            "Parsed '%s' by %s: %d chapters (%s)",
            novel.title,
            novel.author,
            len(novel.chapters),
            source_format,
        )
        return novel

    def parse_file(self, file_path: str | Path) -> NovelRecord:
        """Read and parse a manuscript file.

        The novel title falls back to a name derived from the file name
        when the manuscript itself does not provide one.

        Args:
            file_path: Path to a .txt or .md file.

        Returns:
            The parsed NovelRecord.

        Raises:
            FileNotFoundError: If file_path does not exist.
            UnsupportedFormatError: If the extension is not supported.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        source_format = self._detect_format(path)
        novel = self.parse(self._read_text(path), source_format)

        if novel.title == self._config.unknown_title:
            novel.title = self._extract_title_from_filename(path.name)
        return novel

    def _whole_document_chapter(
        self, raw_text: str, lines: list[str], metadata: DocumentMetadata
    ) -> Chapter:
        """Build the single chapter used when a Markdown manuscript has no chapters."""
        remaining = "\n".join(
            line for i, line in enumerate(lines) if i not in metadata.consumed_lines
        )
        body = remaining if remaining.strip() else raw_text
        return Chapter(
            title=self._config.default_chapter_title,
            content=render_chapter_body(body),
            index=0,
        )

    def _detect_format(self, file_path: Path) -> str:
        """Determine source format from extension.

        Args:
            file_path: Path to the file.

        Returns:
            Format string ("plaintext" or "markdown").

        Raises:
            UnsupportedFormatError: If extension is not supported.
        """
        ext = file_path.suffix.lower()
        if ext not in SUPPORTED_FORMATS:
            raise UnsupportedFormatError(
                f"Unsupported file format: '{ext}'. "
                f"Supported: {', '.join(SUPPORTED_FORMATS.keys())}"
            )
        return SUPPORTED_FORMATS[ext]

    def _read_text(self, file_path: Path) -> str:
        """Read a manuscript file with encoding detection.

        Tries UTF-8 (with or without BOM) first, then uses chardet for
        fallback detection, then GB18030 for legacy Chinese files.

        Args:
            file_path: Path to the text file.

        Returns:
            The file content as a string.
        """
        try:
            return file_path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError:
            pass

        raw_bytes = file_path.read_bytes()
        detected = chardet.detect(raw_bytes)
        encoding = detected.get("encoding") or "utf-8"
        confidence = detected.get("confidence", 0)

        if confidence < 0.7:
            logger.warning(
                "Low confidence encoding detection for %s: %s (%.0f%%)",
                file_path,
                encoding,
                confidence * 100,
            )

        try:
            return raw_bytes.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            try:
                return raw_bytes.decode("gb18030")
            except UnicodeDecodeError:
                logger.error("Failed to decode file: %s", file_path)
                return raw_bytes.decode("utf-8", errors="replace")

    def _extract_title_from_filename(self, filename: str) -> str:
        """Derive a title from a file name.

        Drops the extension and any leading numbering such as ``01-``.

        Args:
            filename: The manuscript's file name.

        Returns:
            The derived title, or the unknown-title sentinel if nothing is left.
        """
        stem = re.sub(r"\.[^/.]+$", "", filename)
        title = re.sub(r"^\d+[.、\-_\s]*", "", stem).strip()
        return title or self._config.unknown_title


_default_parser = NovelParser()


def parse(raw_text: str, source_format: str) -> NovelRecord:
    """Parse manuscript text with the default parsing configuration."""
    return _default_parser.parse(raw_text, source_format)
