"""Export of novel records back to their source text format."""

import logging
import re
from pathlib import Path

from novel_reader.ingestion.patterns import (
    MARKER_RULES,
    extract_chapter_title,
    is_chapter_title,
    match_rule,
)
from novel_reader.models.novel import Chapter, NovelRecord

logger = logging.getLogger(__name__)


def export_novel(novel: NovelRecord) -> tuple[str, str]:
    """Serialize a novel in its source format.

    The output re-parses to the same title, author and chapter titles.

    Args:
        novel: The novel to export.

    Returns:
        A (file name, text) pair.
    """
    if novel.source_format == "markdown":
        header = _markdown_header(novel)
        heading = _markdown_heading
    else:
        header = [novel.title, f"作者：{novel.author}", ""]
        heading = _plaintext_heading

    sections = [
        "\n".join([heading(chapter), "", chapter.content, ""])
        for chapter in novel.chapters
    ]
    text = "\n".join(header + sections)
    return f"{_safe_filename(novel.title)}{novel.file_extension}", text


def write_export(novel: NovelRecord, export_dir: str | Path) -> Path:
    """Write an exported novel into a directory and return the file path."""
    filename, text = export_novel(novel)
    directory = Path(export_dir)
    directory.mkdir(parents=True, exist_ok=True)

    path = directory / filename
    path.write_text(text, encoding="utf-8")
    logger.info("Exported '%s' to %s", novel.title, path)
    return path


def _markdown_header(novel: NovelRecord) -> list[str]:
    # A title heading that reads as a chapter marker would open a chapter
    if match_rule(novel.title, MARKER_RULES) is not None:
        return [
            "---",
            f'title: "{novel.title}"',
            f'author: "{novel.author}"',
            "---",
            "",
        ]
    return [f"# {novel.title}", f"作者：{novel.author}", ""]


def _markdown_heading(chapter: Chapter) -> str:
    return f"## {chapter.title}"


def _plaintext_heading(chapter: Chapter) -> str:
    # Titles that would not re-classify to themselves are written as headings
    if is_chapter_title(chapter.title) and extract_chapter_title(chapter.title) == chapter.title:
        return chapter.title
    return f"## {chapter.title}"


def _safe_filename(title: str) -> str:
    return re.sub(r'[\\/:*?"<>|\s]+', "_", title).strip("_") or "novel"
