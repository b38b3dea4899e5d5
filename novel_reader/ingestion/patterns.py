"""Chapter heading detection rules.

Each rule pairs a pattern with the capture group that holds the display
title. Rules are tried in order: the first match decides the title, while
any match at all classifies the line as a chapter boundary.
"""

import re
from dataclasses import dataclass

CJK_NUMERALS = "零〇一二三四五六七八九十百千万两"

SECTION_WORDS = ("序章", "楔子", "前言", "后记", "尾声", "番外")


@dataclass(frozen=True)
class ChapterRule:
    """A heading convention: ``title_group`` of None means the whole line is the title."""

    name: str
    pattern: re.Pattern[str]
    title_group: int | None = None


HEADING_RULE = ChapterRule(
    name="markdown_heading",
    pattern=re.compile(r"^#{1,3}\s+(.+)$"),
    title_group=1,
)

MARKER_RULES: tuple[ChapterRule, ...] = (
    ChapterRule(
        name="ordinal",
        pattern=re.compile(rf"^第[{CJK_NUMERALS}\d]+(?:章|回|节|部分|卷)(.*)$"),
    ),
    ChapterRule(
        name="latin_chapter",
        pattern=re.compile(r"^chapter\s*\d+(.*)$", re.IGNORECASE),
    ),
    ChapterRule(
        name="numbered",
        pattern=re.compile(rf"^(?:\d+|[{CJK_NUMERALS}]+)[.、]\s*(.+)$"),
        title_group=1,
    ),
    ChapterRule(
        name="section_word",
        pattern=re.compile(rf"^(?:{'|'.join(SECTION_WORDS)})"),
    ),
)

CHAPTER_RULES: tuple[ChapterRule, ...] = (HEADING_RULE, *MARKER_RULES)


def match_rule(
    line: str, rules: tuple[ChapterRule, ...] = CHAPTER_RULES
) -> tuple[ChapterRule, re.Match[str]] | None:
    """Return the first rule matching the trimmed line, with its match."""
    stripped = line.strip()
    if not stripped:
        return None
    for rule in rules:
        match = rule.pattern.match(stripped)
        if match:
            return rule, match
    return None


def is_chapter_title(line: str) -> bool:
    """Check whether a line starts a new chapter."""
    return match_rule(line) is not None


def extract_chapter_title(line: str) -> str:
    """Derive the display title of a boundary line.

    Markdown headings and numbered items yield their trailing text; the
    other conventions keep the whole trimmed line. The trimmed line is
    also the fallback whenever the captured text is empty.

    Args:
        line: A line for which ``is_chapter_title`` is true.

    Returns:
        A non-empty title string.
    """
    stripped = line.strip()
    found = match_rule(stripped)
    if found is None:
        return stripped

    rule, match = found
    if rule.title_group is not None:
        title = match.group(rule.title_group).strip()
        if title:
            return title
    return stripped
