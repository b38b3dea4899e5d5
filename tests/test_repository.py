"""Tests for the SQLite novel repository."""

from pathlib import Path

import pytest

from novel_reader.exceptions import NovelNotFoundError
from novel_reader.ingestion.parser import NovelParser
from novel_reader.models.novel import NovelRecord
from novel_reader.storage.repository import SQLiteNovelRepository

SPRING_MD = "# 春天的故事\n作者：方鸿渐\n\n## 第一章 新的开始\n内容A\n\n## 第二章 成长\n内容B"


@pytest.fixture
def repository(tmp_path: Path) -> SQLiteNovelRepository:
    return SQLiteNovelRepository(tmp_path / "db" / "novels.db")


@pytest.fixture
def novel() -> NovelRecord:
    return NovelParser().parse(SPRING_MD, "markdown")


class TestPutAndGet:
    def test_round_trip(self, repository: SQLiteNovelRepository, novel: NovelRecord) -> None:
        repository.put(novel)
        restored = repository.get(novel.id)
        assert restored is not None
        assert restored.model_dump() == novel.model_dump()

    def test_get_missing_returns_none(self, repository: SQLiteNovelRepository) -> None:
        assert repository.get("missing") is None

    def test_require_missing_raises(self, repository: SQLiteNovelRepository) -> None:
        with pytest.raises(NovelNotFoundError):
            repository.require("missing")

    def test_put_same_id_updates(
        self, repository: SQLiteNovelRepository, novel: NovelRecord
    ) -> None:
        repository.put(novel)
        novel.chapters[0].content += "<p>追加</p>"
        repository.put(novel)

        stored = repository.list()
        assert len(stored) == 1
        assert stored[0].chapters[0].content.endswith("<p>追加</p>")

    def test_list_in_insertion_order(self, repository: SQLiteNovelRepository) -> None:
        parser = NovelParser()
        first = parser.parse("甲书\n第一章\n内容", "plaintext")
        second = parser.parse("乙书\n第一章\n内容", "plaintext")
        repository.put(first)
        repository.put(second)
        assert [n.title for n in repository.list()] == ["甲书", "乙书"]


class TestMergeSemantics:
    def test_same_title_and_author_replaces(
        self,
        repository: SQLiteNovelRepository,
        novel: NovelRecord,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        repository.put(novel)
        reimported = NovelParser().parse(SPRING_MD, "markdown")

        with caplog.at_level("INFO"):
            repository.put(reimported)

        stored = repository.list()
        assert len(stored) == 1
        assert stored[0].id == reimported.id
        assert repository.get(novel.id) is None
        assert "Replacing" in caplog.text

    def test_different_author_kept_separately(
        self, repository: SQLiteNovelRepository, novel: NovelRecord
    ) -> None:
        repository.put(novel)
        other = novel.model_copy(update={"id": "other-id", "author": "别人"})
        repository.put(other)
        assert len(repository.list()) == 2


class TestDelete:
    def test_delete_existing(self, repository: SQLiteNovelRepository, novel: NovelRecord) -> None:
        repository.put(novel)
        assert repository.delete(novel.id) is True
        assert repository.get(novel.id) is None

    def test_delete_missing(self, repository: SQLiteNovelRepository) -> None:
        assert repository.delete("missing") is False

    def test_clear(self, repository: SQLiteNovelRepository, novel: NovelRecord) -> None:
        repository.put(novel)
        assert repository.clear() == 1
        assert repository.list() == []


class TestProgress:
    def test_update_progress(self, repository: SQLiteNovelRepository, novel: NovelRecord) -> None:
        repository.put(novel)
        repository.update_progress(novel.id, 1)
        stored = repository.get(novel.id)
        assert stored is not None
        assert stored.last_read_chapter == 1

    def test_out_of_range(self, repository: SQLiteNovelRepository, novel: NovelRecord) -> None:
        repository.put(novel)
        with pytest.raises(IndexError):
            repository.update_progress(novel.id, 5)

    def test_missing_novel(self, repository: SQLiteNovelRepository) -> None:
        with pytest.raises(NovelNotFoundError):
            repository.update_progress("missing", 0)


class TestStorageInfo:
    def test_empty(self, repository: SQLiteNovelRepository) -> None:
        info = repository.storage_info()
        assert info.novels == 0
        assert info.size_bytes == 0
        assert info.size_mb == "0.00 MB"

    def test_counts_novels(self, repository: SQLiteNovelRepository, novel: NovelRecord) -> None:
        repository.put(novel)
        info = repository.storage_info()
        assert info.novels == 1
        assert info.size_bytes > 0
