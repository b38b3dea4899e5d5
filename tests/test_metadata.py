"""Tests for title and author detection."""

from novel_reader.ingestion.metadata import (
    extract_markdown_metadata,
    extract_plaintext_metadata,
)


class TestMarkdownMetadata:
    def test_title_and_author_lines(self) -> None:
        lines = "# 春天的故事\n作者：方鸿渐\n\n## 第一章 新的开始\n内容A".splitlines()
        metadata = extract_markdown_metadata(lines)
        assert metadata.title == "春天的故事"
        assert metadata.author == "方鸿渐"
        assert metadata.consumed_lines == {0, 1}
        assert metadata.front_matter is None

    def test_front_matter(self) -> None:
        lines = [
            "---",
            'title: "红楼梦"',
            "Author: '曹雪芹'",
            "tags: 古典",
            "---",
            "",
            "## 第一回",
        ]
        metadata = extract_markdown_metadata(lines)
        assert metadata.title == "红楼梦"
        assert metadata.author == "曹雪芹"
        assert metadata.front_matter == (0, 4)
        assert metadata.consumed_lines == {0, 1, 2, 3, 4}

    def test_unclosed_front_matter_is_ignored(self) -> None:
        metadata = extract_markdown_metadata(["---", "title: 书", "正文"])
        assert metadata.front_matter is None
        assert metadata.title is None
        assert metadata.consumed_lines == set()

    def test_heading_that_is_a_chapter_marker_is_not_a_title(self) -> None:
        metadata = extract_markdown_metadata(["# 第一章 开始", "内容"])
        assert metadata.title is None
        assert metadata.consumed_lines == set()

    def test_first_title_wins(self) -> None:
        metadata = extract_markdown_metadata(["# 书名", "# 另一个", "作者：某人"])
        assert metadata.title == "书名"
        assert metadata.author == "某人"
        # The second heading opens a chapter, so its author line stays in the body
        assert metadata.consumed_lines == {0}

    def test_author_after_chapter_boundary(self) -> None:
        lines = ["# 书名", "## 第一章 开始", "作者：某人", "内容"]
        metadata = extract_markdown_metadata(lines)
        assert metadata.author == "某人"
        assert 2 not in metadata.consumed_lines

    def test_title_heading_after_boundary_is_a_chapter(self) -> None:
        metadata = extract_markdown_metadata(["## 第一章", "# 书名", "内容"])
        assert metadata.title is None
        assert metadata.consumed_lines == set()

    def test_level2_heading_is_not_a_title(self) -> None:
        metadata = extract_markdown_metadata(["## 书名", "内容"])
        assert metadata.title is None

    def test_title_beyond_scan_window(self) -> None:
        lines = ["文字"] * 10 + ["# 书名"]
        metadata = extract_markdown_metadata(lines)
        assert metadata.title is None

    def test_custom_scan_window(self) -> None:
        lines = ["文字"] * 10 + ["# 书名"]
        metadata = extract_markdown_metadata(lines, scan_lines=11)
        assert metadata.title == "书名"

    def test_ascii_colon_author(self) -> None:
        metadata = extract_markdown_metadata(["作者: Lu Xun"])
        assert metadata.author == "Lu Xun"

    def test_front_matter_takes_precedence(self) -> None:
        lines = ["---", "author: 甲", "---", "作者：乙", "## 第一章", "内容"]
        metadata = extract_markdown_metadata(lines)
        assert metadata.author == "甲"
        assert 3 not in metadata.consumed_lines


class TestPlaintextMetadata:
    def test_title_only(self) -> None:
        metadata = extract_plaintext_metadata(["我的故事", "这是正文"])
        assert metadata.title == "我的故事"
        assert metadata.author is None
        assert metadata.consumed_lines == {0}

    def test_title_and_author_on_first_line(self) -> None:
        metadata = extract_plaintext_metadata(["三体 作者：刘慈欣", "第一章 科学边界"])
        assert metadata.title == "三体"
        assert metadata.author == "刘慈欣"
        assert metadata.consumed_lines == {0}

    def test_author_on_following_line(self) -> None:
        metadata = extract_plaintext_metadata(["三体", "作者：刘慈欣", "第一章"])
        assert metadata.title == "三体"
        assert metadata.author == "刘慈欣"
        assert metadata.consumed_lines == {0, 1}

    def test_first_author_match_wins(self) -> None:
        metadata = extract_plaintext_metadata(["书名", "作者：甲", "作者：乙"])
        assert metadata.author == "甲"

    def test_author_after_chapter_boundary(self) -> None:
        metadata = extract_plaintext_metadata(["书名", "第一章", "作者：甲"])
        assert metadata.author == "甲"
        assert metadata.consumed_lines == {0}

    def test_author_beyond_scan_window(self) -> None:
        metadata = extract_plaintext_metadata(["书名", "a", "b", "c", "d", "作者：甲"])
        assert metadata.author is None

    def test_first_line_boundary_is_not_a_title(self) -> None:
        metadata = extract_plaintext_metadata(["第一章 开始", "内容"])
        assert metadata.title is None
        assert metadata.consumed_lines == set()

    def test_first_line_author_label_is_not_a_title(self) -> None:
        metadata = extract_plaintext_metadata(["作者：甲", "第一章"])
        assert metadata.title is None
        assert metadata.author == "甲"

    def test_empty_lines(self) -> None:
        metadata = extract_plaintext_metadata([])
        assert metadata.title is None
        assert metadata.author is None
