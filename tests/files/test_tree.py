"""Tests for files/tree.py lazy directory tree."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from fileseek.files.tree import FileTreeNode, build_tree, build_tree_sync, natural_key


@pytest.fixture
def browse_root(tmp_path: Path) -> Path:
    root = tmp_path / "browse"
    root.mkdir()
    for name in ["file10.txt", "file2.txt", "File1.txt", "b.md"]:
        (root / name).write_text("x")
    (root / "zeta").mkdir()
    (root / "Alpha").mkdir()
    (root / "Alpha" / "inner.txt").write_text("x")
    (root / ".hidden").write_text("x")
    (root / ".config").mkdir()
    (root / ".git").mkdir()
    return root


class TestNaturalKey:
    def test_numbers_compare_numerically(self) -> None:
        names = ["file10", "file2", "file1"]
        assert sorted(names, key=natural_key) == ["file1", "file2", "file10"]

    def test_case_insensitive(self) -> None:
        assert sorted(["b", "A", "c"], key=natural_key) == ["A", "b", "c"]

    def test_mixed_leading_digits(self) -> None:
        assert sorted(["a", "10", "2"], key=natural_key) == ["2", "10", "a"]


class TestFileTreeNode:
    def test_directories_first_then_natural_order(self, browse_root: Path) -> None:
        children = FileTreeNode(browse_root).load_children()

        assert [c.name for c in children] == [
            "Alpha",
            "zeta",
            "b.md",
            "File1.txt",
            "file2.txt",
            "file10.txt",
        ]

    def test_hidden_entries_shown_on_request(self, browse_root: Path) -> None:
        names = [c.name for c in FileTreeNode(browse_root).load_children(show_hidden=True)]

        assert ".hidden" in names
        assert ".config" in names

    def test_vcs_dir_filtered_even_when_showing_hidden(self, browse_root: Path) -> None:
        names = [c.name for c in FileTreeNode(browse_root).load_children(show_hidden=True)]
        assert ".git" not in names

    def test_children_are_lazy(self, browse_root: Path) -> None:
        """Nested directories are not read until expanded."""
        alpha = next(c for c in FileTreeNode(browse_root).load_children() if c.name == "Alpha")

        assert alpha.is_dir
        assert alpha.children == []
        assert not alpha.is_expanded

        children = alpha.expand()

        assert alpha.is_expanded
        assert [c.name for c in children] == ["inner.txt"]

    def test_expand_loads_once(self, browse_root: Path) -> None:
        node = FileTreeNode(browse_root)
        node.expand()
        (browse_root / "late.txt").write_text("x")

        node.collapse()
        names = [c.name for c in node.expand()]

        assert "late.txt" not in names

    def test_file_node(self, browse_root: Path) -> None:
        node = FileTreeNode(browse_root / "b.md")

        assert not node.is_dir
        assert node.children is None
        assert node.expand() == []
        assert not node.is_expanded

    def test_unreadable_directory_yields_no_children(self, browse_root: Path) -> None:
        node = FileTreeNode(browse_root)
        with patch("fileseek.files.tree.os.scandir", side_effect=PermissionError("denied")):
            assert node.load_children() == []
        assert node.children == []


class TestBuildTree:
    def test_sync(self, browse_root: Path) -> None:
        assert [c.name for c in build_tree_sync(browse_root)][:2] == ["Alpha", "zeta"]

    @pytest.mark.asyncio
    async def test_async_matches_sync(self, browse_root: Path) -> None:
        nodes = await build_tree(browse_root)
        assert [c.name for c in nodes] == [c.name for c in build_tree_sync(browse_root)]
