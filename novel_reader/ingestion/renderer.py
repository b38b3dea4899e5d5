"""Inline Markdown rendering for chapter bodies.

Converts a raw chapter body into display markup. Source text is escaped
before any rule runs, so the only tags in the output are the ones emitted
here. Rules are applied in a fixed order; later rules must not re-match
markup inserted by earlier ones (images before links, bold before italic).
"""

import html
import re

IMAGE_CLASS = "max-w-full h-auto mx-auto rounded-lg shadow-md my-4"
BLOCKQUOTE_CLASS = "border-l-4 border-primary pl-4 italic my-4"
RULE_CLASS = "my-6"
LIST_CLASS = "list-disc list-inside my-4"
PARAGRAPH_CLASS = "mb-4"

# Lines starting with one of these are blocks and never wrapped in <p>
BLOCK_PREFIXES = ("<h4>", "<h5>", "<h6>", "<blockquote", "<hr", "<ul", "<img")

UNSAFE_URL_SCHEMES = ("javascript:", "vbscript:", "data:")

HEADING_PATTERN = re.compile(r"^(#{4,6})[ \t]+(.+)$", re.MULTILINE)
BOLD_PATTERNS = (
    re.compile(r"\*\*(.+?)\*\*"),
    re.compile(r"(?<![A-Za-z0-9_])__(.+?)__(?![A-Za-z0-9_])"),
)
ITALIC_PATTERNS = (
    re.compile(r"\*(?!\s)(.+?)(?<!\s)\*"),
    re.compile(r"(?<![A-Za-z0-9_])_(?!\s)(.+?)(?<!\s)_(?![A-Za-z0-9_])"),
)
STRIKETHROUGH_PATTERN = re.compile(r"~~(.+?)~~")
CODE_PATTERN = re.compile(r"`(.+?)`")
IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\(([^)\s]+)\)")
LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")
BLOCKQUOTE_PATTERN = re.compile(r"^&gt;[ \t]*(.+)$", re.MULTILINE)
RULE_PATTERN = re.compile(r"^-{3,}[ \t]*$", re.MULTILINE)
LIST_ITEM_PATTERN = re.compile(r"^(?:[*-]|\d+\.)[ \t]+(.+)$", re.MULTILINE)
LIST_RUN_PATTERN = re.compile(r"^<li>.*</li>(?:\n<li>.*</li>)*$", re.MULTILINE)


def render_chapter_body(raw: str) -> str:
    """Render a raw chapter body into markup.

    Never raises: syntax that does not match a rule is kept as literal
    paragraph text. Rendering is not idempotent, so callers render once.

    Args:
        raw: The chapter body as stored after segmentation.

    Returns:
        Concatenated markup fragments, or an empty string for blank input.
    """
    if not raw or not raw.strip():
        return ""

    text = html.escape(raw, quote=True)

    text = HEADING_PATTERN.sub(_render_heading, text)
    for pattern in BOLD_PATTERNS:
        text = pattern.sub(r"<strong>\1</strong>", text)
    for pattern in ITALIC_PATTERNS:
        text = pattern.sub(r"<em>\1</em>", text)
    text = STRIKETHROUGH_PATTERN.sub(r"<del>\1</del>", text)
    text = CODE_PATTERN.sub(r"<code>\1</code>", text)
    text = IMAGE_PATTERN.sub(_render_image, text)
    text = LINK_PATTERN.sub(_render_link, text)
    text = BLOCKQUOTE_PATTERN.sub(
        rf'<blockquote class="{BLOCKQUOTE_CLASS}">\1</blockquote>', text
    )
    text = RULE_PATTERN.sub(f'<hr class="{RULE_CLASS}">', text)
    text = LIST_ITEM_PATTERN.sub(r"<li>\1</li>", text)
    text = LIST_RUN_PATTERN.sub(_wrap_list, text)

    return "".join(_wrap_paragraph(line) for line in text.split("\n") if line.strip())


def _render_heading(match: re.Match[str]) -> str:
    level = min(len(match.group(1)), 6)
    return f"<h{level}>{match.group(2).strip()}</h{level}>"


def _render_image(match: re.Match[str]) -> str:
    alt, url = match.group(1), safe_url(match.group(2), allow_data_image=True)
    return f'<img src="{url}" alt="{alt}" class="{IMAGE_CLASS}">'


def _render_link(match: re.Match[str]) -> str:
    label, url = match.group(1), safe_url(match.group(2))
    return f'<a href="{url}" target="_blank" rel="noopener noreferrer">{label}</a>'


def _wrap_list(match: re.Match[str]) -> str:
    items = match.group(0).replace("\n", "")
    return f'<ul class="{LIST_CLASS}">{items}</ul>'


def _wrap_paragraph(line: str) -> str:
    stripped = line.strip()
    if stripped.startswith(BLOCK_PREFIXES):
        return stripped
    return f'<p class="{PARAGRAPH_CLASS}">{stripped}</p>'


def safe_url(url: str, allow_data_image: bool = False) -> str:
    """Replace script-capable URLs with an inert fragment link.

    Args:
        url: An already HTML-escaped URL.
        allow_data_image: Keep ``data:image/...`` URLs (for image sources).

    Returns:
        The URL unchanged, or ``"#"`` when its scheme is unsafe.
    """
    lowered = re.sub(r"\s+", "", url).lower()
    if allow_data_image and lowered.startswith("data:image/"):
        return url
    if lowered.startswith(UNSAFE_URL_SCHEMES):
        return "#"
    return url
