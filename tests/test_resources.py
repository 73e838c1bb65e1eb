"""
Tests for ResourceMutator: create, update (rename/move/rewrite), delete.
"""
import os

import pytest

from mdkanban.errors import ResourceNotFound, StorageError
from mdkanban.resources import ResourceMutator


@pytest.fixture
def mutator(tmp_path):
    return ResourceMutator(tmp_path)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# create
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class TestCreate:

    def test_file_with_parents(self, mutator, tmp_path):
        mutator.create("a/b/c.md", is_file=True, content="hello")
        assert (tmp_path / "a" / "b" / "c.md").read_text() == "hello"

    def test_file_default_empty(self, mutator, tmp_path):
        mutator.create("a/b/c.md", is_file=True)
        assert (tmp_path / "a" / "b" / "c.md").read_text() == ""

    def test_file_overwrites(self, mutator, tmp_path):
        mutator.create("a/b/c.md", is_file=True, content="one")
        mutator.create("a/b/c.md", is_file=True, content="two")
        assert (tmp_path / "a" / "b" / "c.md").read_text() == "two"

    def test_file_keeps_crlf(self, mutator, tmp_path):
        mutator.create("a/b/c.md", is_file=True, content="one\r\ntwo\r\n")
        assert (tmp_path / "a" / "b" / "c.md").read_bytes() == b"one\r\ntwo\r\n"

    def test_directory_idempotent(self, mutator, tmp_path):
        mutator.create("board/lane")
        (tmp_path / "board" / "lane" / "keep.md").write_text("x")
        mutator.create("board/lane")
        assert (tmp_path / "board" / "lane" / "keep.md").exists()


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# update
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class TestUpdate:

    def test_rename_sanitizes_last_segment(self, mutator, tmp_path):
        mutator.create("a/b/c.md", is_file=True, content="hello")
        target = mutator.update("a/b/c.md", new_path="a/b/c?.md")
        assert target == "a/b/c .md"
        assert (tmp_path / "a" / "b" / "c .md").read_text() == "hello"
        assert not (tmp_path / "a" / "b" / "c.md").exists()

    def test_move_between_lanes_creates_parent(self, mutator, tmp_path):
        mutator.create("work/Todo/card.md", is_file=True, content="x")
        mutator.update("work/Todo/card.md", new_path="work/Done/card.md")
        assert (tmp_path / "work" / "Done" / "card.md").read_text() == "x"
        assert not (tmp_path / "work" / "Todo" / "card.md").exists()

    def test_rename_lane_directory(self, mutator, tmp_path):
        mutator.create("work/Todo/card.md", is_file=True, content="x")
        mutator.update("work/Todo", new_path="work/Backlog")
        assert (tmp_path / "work" / "Backlog" / "card.md").exists()
        assert not (tmp_path / "work" / "Todo").exists()

    def test_content_only_update(self, mutator, tmp_path):
        mutator.create("work/Todo/card.md", is_file=True, content="old")
        mutator.update("work/Todo/card.md", content="new")
        assert (tmp_path / "work" / "Todo" / "card.md").read_text() == "new"

    def test_rewrite_keeps_file_identity(self, mutator, tmp_path):
        path = tmp_path / "work" / "Todo" / "card.md"
        mutator.create("work/Todo/card.md", is_file=True, content="old")
        before = os.stat(path)
        mutator.update("work/Todo/card.md", content="new\r\nline")
        after = os.stat(path)
        assert after.st_ino == before.st_ino
        if hasattr(before, "st_birthtime"):
            assert after.st_birthtime == before.st_birthtime
        assert path.read_bytes() == b"new\r\nline"

    def test_rename_and_rewrite(self, mutator, tmp_path):
        mutator.create("work/Todo/card.md", is_file=True, content="old")
        mutator.update("work/Todo/card.md", new_path="work/Todo/renamed.md", content="new")
        assert (tmp_path / "work" / "Todo" / "renamed.md").read_text() == "new"
        assert not (tmp_path / "work" / "Todo" / "card.md").exists()

    def test_content_ignored_for_directory(self, mutator, tmp_path):
        mutator.create("work/Todo")
        mutator.update("work/Todo", content="ignored")
        assert (tmp_path / "work" / "Todo").is_dir()

    def test_missing_source_raises(self, mutator):
        with pytest.raises(ResourceNotFound):
            mutator.update("nope/card.md", new_path="nope/other.md")

    def test_content_on_missing_file_raises(self, mutator):
        with pytest.raises(ResourceNotFound):
            mutator.update("nope/card.md", content="x")

    def test_failed_rename_leaves_source(self, mutator, tmp_path):
        mutator.create("work/Todo/card.md", is_file=True, content="keep")
        (tmp_path / "blocker").write_text("file in the way")
        with pytest.raises(StorageError):
            mutator.update("work/Todo/card.md", new_path="blocker/card.md")
        assert (tmp_path / "work" / "Todo" / "card.md").read_text() == "keep"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# delete
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class TestDelete:

    def test_delete_file(self, mutator, tmp_path):
        mutator.create("work/Todo/card.md", is_file=True)
        mutator.delete("work/Todo/card.md")
        assert not (tmp_path / "work" / "Todo" / "card.md").exists()
        assert (tmp_path / "work" / "Todo").is_dir()

    def test_delete_non_empty_directory(self, mutator, tmp_path):
        mutator.create("work/Todo/a.md", is_file=True)
        mutator.create("work/Todo/b.md", is_file=True)
        mutator.delete("work/Todo")
        assert not (tmp_path / "work" / "Todo").exists()

    def test_delete_missing_raises(self, mutator):
        with pytest.raises(ResourceNotFound):
            mutator.delete("work/ghost.md")
