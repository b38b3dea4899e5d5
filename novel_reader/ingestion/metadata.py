"""Title and author detection in the leading lines of a manuscript."""

import logging
import re

from novel_reader.ingestion.patterns import MARKER_RULES, is_chapter_title, match_rule
from novel_reader.models.parsed import DocumentMetadata

logger = logging.getLogger(__name__)

FRONT_MATTER_DELIMITER = "---"

AUTHOR_PATTERN = re.compile(r"作者[：:]\s*(.+)")
FRONT_MATTER_ENTRY = re.compile(r"^(\w+):\s*(.+)$")
LEVEL1_HEADING = re.compile(r"^#\s+(.+)$")
# "<title>" optionally followed by an author label on the same line
PLAINTEXT_TITLE_LINE = re.compile(r"^(.+?)(?:\s*作者[：:]\s*(.+))?$")


def extract_markdown_metadata(
    lines: list[str], scan_lines: int = 10
) -> DocumentMetadata:
    """Detect front matter, title and author of a Markdown manuscript.

    A front-matter block is recognized only when line 0 is exactly ``---``
    and a closing ``---`` line exists. After it, up to ``scan_lines`` lines
    are scanned for a level-1 heading that is not itself a chapter marker
    (the title) and an author label line. The title must come before the
    first chapter boundary; the author label may appear anywhere in the
    window but is only consumed when it precedes that boundary. The first
    title and the first author found win, and front-matter values take
    precedence over both.

    Args:
        lines: The manuscript split into raw lines.
        scan_lines: How many lines after the front matter to inspect.

    Returns:
        DocumentMetadata with consumed line indices populated.
    """
    metadata = DocumentMetadata()
    start = 0

    if lines and lines[0].strip() == FRONT_MATTER_DELIMITER:
        end = _find_front_matter_end(lines)
        if end is not None:
            _apply_front_matter(lines[1:end], metadata)
            metadata.front_matter = (0, end)
            metadata.consumed_lines.update(range(0, end + 1))
            start = end + 1
        else:
            logger.debug("Unclosed front matter; treating line 0 as body text")

    boundary_seen = False
    for i in range(start, min(start + scan_lines, len(lines))):
        line = lines[i].strip()
        if not line:
            continue

        heading = LEVEL1_HEADING.match(line)
        if (
            heading
            and not boundary_seen
            and metadata.title is None
            and match_rule(heading.group(1), MARKER_RULES) is None
        ):
            metadata.title = heading.group(1).strip()
            metadata.consumed_lines.add(i)
            continue

        if is_chapter_title(line):
            boundary_seen = True
            continue

        author = AUTHOR_PATTERN.search(line)
        if author and metadata.author is None:
            metadata.author = author.group(1).strip()
            # Lines inside a chapter stay part of its body
            if not boundary_seen:
                metadata.consumed_lines.add(i)

    return metadata


def extract_plaintext_metadata(
    lines: list[str], scan_lines: int = 5
) -> DocumentMetadata:
    """Detect title and author of a plain-text manuscript.

    Line 0 carries the title, optionally followed by an author label on the
    same line. The first ``scan_lines`` lines are then scanned forward for
    an author label; the first hit overrides the author taken from line 0.
    An author label found after a chapter boundary is not consumed, so it
    stays in that chapter's body.

    Args:
        lines: Trimmed, non-blank lines of the manuscript.
        scan_lines: How many leading lines may hold the author label.

    Returns:
        DocumentMetadata with consumed line indices populated.
    """
    metadata = DocumentMetadata()
    if not lines:
        return metadata

    first = lines[0]
    if not is_chapter_title(first) and not AUTHOR_PATTERN.match(first):
        match = PLAINTEXT_TITLE_LINE.match(first)
        if match:
            metadata.title = match.group(1).strip()
            if match.group(2):
                metadata.author = match.group(2).strip()
            metadata.consumed_lines.add(0)

    boundary_seen = False
    for i, line in enumerate(lines[:scan_lines]):
        if is_chapter_title(line):
            boundary_seen = True
            continue
        author = AUTHOR_PATTERN.search(line)
        if author:
            metadata.author = author.group(1).strip()
            if not boundary_seen:
                metadata.consumed_lines.add(i)
            break

    return metadata


def _find_front_matter_end(lines: list[str]) -> int | None:
    """Return the index of the closing front-matter delimiter, if any."""
    for i in range(1, len(lines)):
        if lines[i].strip() == FRONT_MATTER_DELIMITER:
            return i
    return None


def _apply_front_matter(entries: list[str], metadata: DocumentMetadata) -> None:
    """Copy recognized ``key: value`` pairs into the metadata."""
    for entry in entries:
        match = FRONT_MATTER_ENTRY.match(entry.strip())
        if not match:
            continue

        key, value = match.group(1).lower(), match.group(2).strip().strip("'\"")
        if key == "title":
            metadata.title = value
        elif key == "author":
            metadata.author = value
        else:
            logger.debug("Ignoring front-matter key: %s", key)
