"""Reading-time helpers: chapter display, progress and image insertion."""

import logging

from novel_reader.config import ParsingConfig
from novel_reader.ingestion.renderer import render_chapter_body
from novel_reader.models.novel import Chapter, NovelRecord

logger = logging.getLogger(__name__)


def get_chapter(novel: NovelRecord, chapter_index: int) -> Chapter:
    """Return a chapter by index, raising IndexError when out of range."""
    if not 0 <= chapter_index < len(novel.chapters):
        raise IndexError(
            f"Chapter index {chapter_index} out of range for '{novel.title}'"
        )
    return novel.chapters[chapter_index]


def chapter_markup(novel: NovelRecord, chapter_index: int) -> str:
    """Return display markup for one chapter.

    Plain-text chapters store raw lines and are rendered here; Markdown
    chapters were rendered at import and are returned as stored.
    """
    chapter = get_chapter(novel, chapter_index)
    if novel.source_format == "plaintext":
        return render_chapter_body(chapter.content)
    return chapter.content


def mark_chapter_read(novel: NovelRecord, chapter_index: int) -> None:
    get_chapter(novel, chapter_index)
    novel.last_read_chapter = chapter_index


def reading_progress(novel: NovelRecord) -> int:
    """Percentage of chapters before the last one read, rounded."""
    if not novel.chapters:
        return 0
    return round(novel.last_read_chapter / len(novel.chapters) * 100)


def insert_image(
    novel: NovelRecord,
    chapter_index: int,
    image_url: str,
    caption: str = "",
    default_caption: str | None = None,
) -> Chapter:
    """Append an image reference to the end of a chapter.

    Plain-text chapters receive Markdown image syntax, rendered with the
    rest of the chapter at display time. Markdown chapters already hold
    markup, so the image is rendered before it is appended.

    Args:
        novel: The novel to modify in place.
        chapter_index: Zero-based index of the target chapter.
        image_url: URL of the uploaded image.
        caption: Alt text; ``default_caption`` is used when empty.
        default_caption: Fallback alt text; defaults to
            ``ParsingConfig.default_image_caption``.

    Returns:
        The modified chapter.
    """
    chapter = get_chapter(novel, chapter_index)
    if default_caption is None:
        default_caption = ParsingConfig().default_image_caption
    snippet = f"![{caption or default_caption}]({image_url})"

    if novel.source_format == "markdown":
        chapter.content += render_chapter_body(snippet)
    else:
        chapter.content += "\n" + snippet + "\n"

    logger.debug("Inserted image %s into chapter %d", image_url, chapter_index)
    return chapter
