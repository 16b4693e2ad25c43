"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides the sample project trees shared by the scanner, quick-open and
CLI tests.
"""

import logging
import shutil
import subprocess
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

# Insert local src directory at the beginning of sys.path
# This ensures that the local fileseek package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of fileseek modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("fileseek"):
        del sys.modules[module_name]


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Start each test with default structlog config and no root handlers."""
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


@pytest.fixture
def project_tree(tmp_path: Path) -> Path:
    """Small project with an ignored VCS dir and OS metadata files."""
    root = tmp_path / "project"
    (root / "src" / "lib").mkdir(parents=True)
    (root / "src" / "main.go").write_text("package main\n")
    (root / "src" / "utils.go").write_text("package main\n")
    (root / "src" / "lib" / "helper.go").write_text("package lib\n")
    (root / "docs").mkdir()
    (root / "docs" / "guide.md").write_text("# guide\n")
    (root / "README.md").write_text("# Project\n")

    # Never reported by the walk
    (root / ".git" / "objects").mkdir(parents=True)
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
    (root / ".git" / "objects" / "blob").write_text("x")
    (root / ".DS_Store").write_text("")
    (root / "src" / ".DS_Store").write_text("")
    return root


@pytest.fixture
def git_project(tmp_path: Path) -> Path:
    """A real git work tree with tracked, untracked and ignored files."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")

    root = tmp_path / "repo"
    root.mkdir()
    subprocess.run(["git", "init", "-q"], cwd=root, check=True, capture_output=True)
    (root / ".gitignore").write_text("build/\n*.log\n")
    (root / "src").mkdir()
    (root / "src" / "main.go").write_text("package main\n")
    (root / "README.md").write_text("# Project\n")
    subprocess.run(["git", "add", "-A"], cwd=root, check=True, capture_output=True)

    # Untracked but not ignored
    (root / "notes.txt").write_text("todo\n")
    # Ignored
    (root / "build").mkdir()
    (root / "build" / "out.bin").write_text("x")
    (root / "debug.log").write_text("x")
    return root
