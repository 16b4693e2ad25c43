"""Default ignore sets for directory enumeration.

These only apply to the fallback walk and the lazy file tree. The git listing
already honours .gitignore and never reports VCS internals.

Both sets are defaults for ``ScannerConfig``; users may replace them.
"""

from __future__ import annotations

# Directories whose whole subtree is pruned (never descended into)
DEFAULT_IGNORED_DIRS: frozenset[str] = frozenset(
    (
        # VCS internals
        ".git",
        ".svn",
        ".hg",
        ".bzr",
    )
)

# OS metadata files that are never useful search results
DEFAULT_IGNORED_FILES: frozenset[str] = frozenset(
    (
        ".DS_Store",  # macOS Finder
        "Thumbs.db",  # Windows Explorer
        "desktop.ini",  # Windows Explorer
    )
)


def is_ignored_dir(name: str, ignored: frozenset[str] = DEFAULT_IGNORED_DIRS) -> bool:
    """Check a directory *name* (not path) against the ignore set."""
    return name in ignored


def is_ignored_file(name: str, ignored: frozenset[str] = DEFAULT_IGNORED_FILES) -> bool:
    """Check a file *name* (not path) against the ignore set."""
    return name in ignored
