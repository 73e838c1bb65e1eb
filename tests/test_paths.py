"""
Tests for logical path helpers.

Covers:
    - resolve()       : root + logical path
    - sanitize_name() : illegal chars replaced in the last segment only
    - atomic_write()  : temp file + rename
"""
from pathlib import Path

import pytest

from mdkanban.paths import atomic_write, resolve, sanitize_name


class TestResolve:

    def test_joins_under_root(self, tmp_path):
        assert resolve(tmp_path, "board/lane/card.md") == tmp_path / "board" / "lane" / "card.md"

    def test_leading_slash_stays_under_root(self, tmp_path):
        assert resolve(tmp_path, "/board") == tmp_path / "board"

    def test_accepts_string_root(self, tmp_path):
        assert resolve(str(tmp_path), "b") == tmp_path / "b"


class TestSanitizeName:

    def test_question_mark_in_name(self):
        assert sanitize_name("a/b/c?.md") == "a/b/c .md"

    def test_every_illegal_char(self):
        assert sanitize_name('x/<>:"\\|?*.md') == "x/        .md"

    def test_separators_preserved(self):
        assert sanitize_name("board/lane/card.md") == "board/lane/card.md"

    def test_directory_segments_untouched(self):
        assert sanitize_name("a:b/c?d/e*.md") == "a:b/c?d/e .md"

    def test_single_segment(self):
        assert sanitize_name("what?") == "what "

    def test_clean_name_unchanged(self):
        assert sanitize_name("Inbox") == "Inbox"


class TestAtomicWrite:

    def test_writes_text(self, tmp_path):
        target = tmp_path / "card.md"
        atomic_write(target, "hello")
        assert target.read_text(encoding="utf-8") == "hello"

    def test_writes_bytes(self, tmp_path):
        target = tmp_path / "blob.bin"
        atomic_write(target, b"\x00\x01")
        assert target.read_bytes() == b"\x00\x01"

    def test_overwrites_and_leaves_no_temp(self, tmp_path):
        target = tmp_path / "card.md"
        target.write_text("old")
        atomic_write(target, "new")
        assert target.read_text() == "new"
        assert [p.name for p in tmp_path.iterdir()] == ["card.md"]

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(OSError):
            atomic_write(tmp_path / "missing" / "card.md", "x")
        assert not (tmp_path / "missing").exists()
