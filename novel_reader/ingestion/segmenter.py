"""Chapter segmentation driven by the heading rules."""

import logging

from pydantic import BaseModel, ConfigDict

from novel_reader.ingestion.patterns import extract_chapter_title, is_chapter_title
from novel_reader.ingestion.renderer import render_chapter_body
from novel_reader.models.novel import Chapter
from novel_reader.models.parsed import DocumentMetadata

logger = logging.getLogger(__name__)


class SegmentationPolicy(BaseModel):
    """How a source format treats text outside of recognized chapters."""

    model_config = ConfigDict(frozen=True)

    name: str
    implicit_first_chapter: bool  # open a default chapter for text before the first boundary
    render_content: bool  # render bodies now instead of at display time
    body_fallback: bool  # no boundaries at all -> one chapter with every body line


PLAINTEXT_POLICY = SegmentationPolicy(
    name="plaintext",
    implicit_first_chapter=False,
    render_content=False,
    body_fallback=True,
)

MARKDOWN_POLICY = SegmentationPolicy(
    name="markdown",
    implicit_first_chapter=True,
    render_content=True,
    body_fallback=False,
)

POLICIES: dict[str, SegmentationPolicy] = {
    PLAINTEXT_POLICY.name: PLAINTEXT_POLICY,
    MARKDOWN_POLICY.name: MARKDOWN_POLICY,
}


class ChapterSegmenter:
    """Splits manuscript lines into ordered chapters in a single pass.

    A boundary line closes the open chapter and opens a new one. Chapters
    whose body is blank are dropped, and indexes are assigned when a
    chapter is committed so they always match list positions.

    Args:
        policy: Pre-chapter text, render timing and fallback behavior.
        default_title: Title for implicit and fallback chapters.
    """

    def __init__(self, policy: SegmentationPolicy, default_title: str = "正文") -> None:
        self._policy = policy
        self._default_title = default_title

    def segment(self, lines: list[str], metadata: DocumentMetadata) -> list[Chapter]:
        """Segment lines into chapters.

        Args:
            lines: The manuscript lines, in the form the metadata was extracted from.
            metadata: Detected metadata; its consumed lines are skipped.

        Returns:
            Ordered chapters, possibly empty.
        """
        chapters: list[Chapter] = []
        current_title: str | None = None
        body: list[str] = []

        for i, line in enumerate(lines):
            if i in metadata.consumed_lines:
                continue

            stripped = line.strip()
            if stripped and is_chapter_title(stripped):
                self._commit(current_title, body, chapters)
                current_title = extract_chapter_title(stripped)
                body = []
            elif current_title is not None:
                body.append(line)
            elif stripped and self._policy.implicit_first_chapter:
                current_title = self._default_title
                body = [line]

        self._commit(current_title, body, chapters)

        if not chapters and self._policy.body_fallback:
            remaining = [
                line
                for i, line in enumerate(lines)
                if i not in metadata.consumed_lines and line.strip()
            ]
            self._commit(self._default_title, remaining, chapters)

        logger.debug(
            "Segmented %d lines into %d chapters (%s)",
            len(lines),
            len(chapters),
            self._policy.name,
        )
        return chapters

    def _commit(
        self, title: str | None, body: list[str], chapters: list[Chapter]
    ) -> None:
        """Append the open chapter if its body has any content."""
        if title is None:
            return

        content = "\n".join(body)
        if not content.strip():
            logger.debug("Dropping chapter without content: %s", title)
            return

        if self._policy.render_content:
            content = render_chapter_body(content)

        chapters.append(Chapter(title=title, content=content, index=len(chapters)))
