"""Search result types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MatchResult:
    """One ranked candidate.

    ``matched_indices`` are offsets into ``path`` (one per query character,
    strictly increasing) and drive highlighting. Recent-file entries shown for
    an empty query carry a score of 0 and no indices.
    """

    path: str
    score: int
    matched_indices: tuple[int, ...] = ()

    @property
    def filename(self) -> str:
        return filename_of(self.path)

    @property
    def directory(self) -> str:
        return directory_part(self.path)


def filename_of(path: str) -> str:
    """Last ``/``-separated component."""
    return path.rsplit("/", 1)[-1]


def directory_part(path: str) -> str:
    """Everything before the filename, without the separator; "" at the root."""
    if "/" not in path:
        return ""
    return path.rsplit("/", 1)[0]


def filename_highlights(result: MatchResult) -> set[int]:
    """Matched positions that fall inside the filename, relative to the filename.

    Matches in the directory part are dropped since only the filename is
    highlighted in result rows.
    """
    offset = len(result.path) - len(result.filename)
    return {i - offset for i in result.matched_indices if i >= offset}
