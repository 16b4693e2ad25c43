"""Fuzzy path search."""

from fileseek.search.fuzzy import rank, score
from fileseek.search.models import (
    MatchResult,
    directory_part,
    filename_highlights,
    filename_of,
)

__all__ = [
    "MatchResult",
    "directory_part",
    "filename_highlights",
    "filename_of",
    "rank",
    "score",
]
