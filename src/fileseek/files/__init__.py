"""Project file enumeration: flat scans for search, lazy trees for browsing."""

from fileseek.files.scanner import FileScanner, list_git_files, scan, walk_files
from fileseek.files.tree import FileTreeNode, build_tree

__all__ = [
    "FileScanner",
    "FileTreeNode",
    "build_tree",
    "list_git_files",
    "scan",
    "walk_files",
]
