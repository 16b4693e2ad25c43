"""Lazily loaded directory tree for the file picker sidebar.

Only one directory level is read at a time; a node's children are loaded
the first time it is expanded.
"""

from __future__ import annotations

import asyncio
import os
import re
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from fileseek.core.excludes import DEFAULT_IGNORED_DIRS, is_ignored_dir

logger = structlog.get_logger()

_DIGITS = re.compile(r"(\d+)")


def natural_key(name: str) -> list[int | str]:
    """Case-insensitive sort key that orders embedded numbers numerically.

    ``file2`` sorts before ``file10``. ``re.split`` with a capture group
    alternates text and digit runs, so keys always compare like with like.
    """
    return [int(part) if i % 2 else part.casefold() for i, part in enumerate(_DIGITS.split(name))]


@dataclass
class FileTreeNode:
    """A file or directory in the tree.

    ``children`` is None for files and a (possibly empty) list for
    directories; an unexpanded directory has an empty list.
    """

    path: Path
    is_expanded: bool = False

    name: str = field(init=False)
    is_dir: bool = field(init=False)
    children: list[FileTreeNode] | None = field(init=False)
    _loaded: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self.name = self.path.name
        self.is_dir = self.path.is_dir()
        self.children = [] if self.is_dir else None

    def load_children(
        self,
        *,
        show_hidden: bool = False,
        ignored_dirs: frozenset[str] = DEFAULT_IGNORED_DIRS,
    ) -> list[FileTreeNode]:
        """Read this directory's entries: directories first, then natural name order."""
        if not self.is_dir:
            return []

        try:
            with os.scandir(self.path) as it:
                entries = list(it)
        except OSError as e:
            logger.debug("tree_list_failed", path=str(self.path), error=str(e))
            self.children = []
            self._loaded = True
            return self.children

        nodes: list[FileTreeNode] = []
        for entry in entries:
            if not show_hidden and entry.name.startswith("."):
                continue
            if is_ignored_dir(entry.name, ignored_dirs):
                continue
            nodes.append(FileTreeNode(Path(entry.path)))

        nodes.sort(key=lambda n: (not n.is_dir, natural_key(n.name)))
        self.children = nodes
        self._loaded = True
        return nodes

    def expand(self, *, show_hidden: bool = False) -> list[FileTreeNode]:
        """Mark expanded, loading children on first expansion."""
        if not self.is_dir:
            return []
        if not self._loaded:
            self.load_children(show_hidden=show_hidden)
        self.is_expanded = True
        return self.children or []

    def collapse(self) -> None:
        self.is_expanded = False


def build_tree_sync(root: Path, *, show_hidden: bool = False) -> list[FileTreeNode]:
    """First level of the tree under ``root``."""
    return FileTreeNode(root).load_children(show_hidden=show_hidden)


async def build_tree(root: Path, *, show_hidden: bool = False) -> list[FileTreeNode]:
    """Build the first level off the event loop."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, lambda: build_tree_sync(root, show_hidden=show_hidden))
