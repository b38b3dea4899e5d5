"""Manuscript ingestion: heading detection, segmentation and rendering."""

from novel_reader.ingestion.parser import NovelParser, parse
from novel_reader.ingestion.renderer import render_chapter_body
from novel_reader.ingestion.segmenter import ChapterSegmenter, SegmentationPolicy

__all__ = [
    "ChapterSegmenter",
    "NovelParser",
    "SegmentationPolicy",
    "parse",
    "render_chapter_body",
]
