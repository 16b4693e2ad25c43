"""Project file enumeration for quick open.

Two strategies, tried in order:
- ``git ls-files`` (tracked + untracked, minus ignored) when the root is in a
  work tree. Fast and respects .gitignore.
- ``os.walk`` with in-place pruning of ignored directory names. Deterministic
  (sorted traversal) for a given snapshot.

Both stop silently at ``max_files``. Nothing here raises: an unusable git
falls through to the walk, and an unreadable root yields no paths.
"""

from __future__ import annotations

import asyncio
import os
import subprocess
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from fileseek.config.constants import GIT_LS_FILES_ARGS
from fileseek.config.models import ScannerConfig
from fileseek.core.excludes import (
    DEFAULT_IGNORED_DIRS,
    DEFAULT_IGNORED_FILES,
    is_ignored_dir,
    is_ignored_file,
)

logger = structlog.get_logger()


def list_git_files(root: Path, *, max_files: int, git_executable: str = "git") -> list[str] | None:
    """List files via git. Returns None if git can't be used for ``root``."""
    try:
        proc = subprocess.run(
            [git_executable, *GIT_LS_FILES_ARGS],
            cwd=root,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError as e:
        # git missing, root missing, or not a directory
        logger.debug("git_listing_unavailable", root=str(root), reason=str(e))
        return None

    if proc.returncode != 0:
        logger.debug("git_listing_unavailable", root=str(root), returncode=proc.returncode)
        return None

    try:
        output = proc.stdout.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("git_listing_unavailable", root=str(root), reason="undecodable output")
        return None

    paths: list[str] = []
    for entry in output.split("\0"):
        if not entry:
            continue
        if len(paths) >= max_files:
            logger.info("scan_truncated", root=str(root), source="git", max_files=max_files)
            break
        paths.append(entry)
    return paths


def walk_files(
    root: Path,
    *,
    max_files: int,
    ignored_dirs: frozenset[str] = DEFAULT_IGNORED_DIRS,
    ignored_files: frozenset[str] = DEFAULT_IGNORED_FILES,
) -> list[str]:
    """Walk ``root`` and return relative ``/``-separated file paths.

    Ignored directories are removed from ``dirnames`` before descent, so their
    subtrees are never read.
    """
    root_errors: list[OSError] = []

    def _on_error(err: OSError) -> None:
        if Path(err.filename or "") == root:
            root_errors.append(err)

    paths: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        # Prune in place so os.walk never enters ignored dirs
        dirnames[:] = sorted(d for d in dirnames if not is_ignored_dir(d, ignored_dirs))

        rel_dir = Path(dirpath).relative_to(root).as_posix()
        prefix = "" if rel_dir == "." else f"{rel_dir}/"

        for filename in sorted(filenames):
            if is_ignored_file(filename, ignored_files):
                continue
            if len(paths) >= max_files:
                logger.info("scan_truncated", root=str(root), source="walk", max_files=max_files)
                return paths
            paths.append(prefix + filename)

    if root_errors:
        logger.warning("scan_root_unreadable", root=str(root), error=str(root_errors[0]))
    return paths


@dataclass
class FileScanner:
    """Enumerates a project root off the event loop.

    Usage::

        scanner = FileScanner(ScannerConfig())
        paths = await scanner.scan(Path("/repo"))

    Scans have no cancellation: a superseding scan simply finishes later, and
    the caller keeps whichever result it asked for last.
    """

    config: ScannerConfig = field(default_factory=ScannerConfig)
    max_workers: int = 1

    _executor: ThreadPoolExecutor | None = field(default=None, init=False)

    async def scan(self, root: Path) -> list[str]:
        """Scan ``root`` on the worker pool and return relative paths."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.max_workers,
                thread_name_prefix="fileseek-scanner",
            )
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self.scan_sync, root)

    def scan_sync(self, root: Path) -> list[str]:
        """Blocking scan: git listing first, then the pruned walk."""
        if self.config.use_git:
            paths = list_git_files(
                root,
                max_files=self.config.max_files,
                git_executable=self.config.git_executable,
            )
            if paths is not None:
                logger.debug("scan_complete", root=str(root), source="git", count=len(paths))
                return paths

        paths = walk_files(
            root,
            max_files=self.config.max_files,
            ignored_dirs=frozenset(self.config.ignored_dirs),
            ignored_files=frozenset(self.config.ignored_files),
        )
        logger.debug("scan_complete", root=str(root), source="walk", count=len(paths))
        return paths

    def close(self) -> None:
        """Release the worker pool. Safe to call repeatedly."""
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None


async def scan(root: Path, config: ScannerConfig | None = None) -> list[str]:
    """One-shot scan with a throwaway worker pool."""
    scanner = FileScanner(config or ScannerConfig())
    try:
        return await scanner.scan(root)
    finally:
        scanner.close()
