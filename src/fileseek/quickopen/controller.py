"""Quick-open state: query, scanned paths, ranked results and selection.

Presentation-agnostic. A UI binds its text field to ``set_query()``, its
arrow keys to ``move_selection()``, Enter to ``submit()`` and the numbered
shortcuts to ``select_index()``, and re-renders from ``results`` whenever
``on_update`` fires.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import structlog

from fileseek.config.models import FileSeekConfig, SearchConfig
from fileseek.files.scanner import FileScanner
from fileseek.search.fuzzy import rank
from fileseek.search.models import MatchResult

logger = structlog.get_logger()


class QuickOpenController:
    """Owns the query string and the last scan, re-ranking on every query change.

    With an empty query the results are the most recent files (score 0, no
    highlights) rather than the whole project.
    """

    def __init__(
        self,
        root: Path,
        *,
        scanner: FileScanner | None = None,
        config: SearchConfig | None = None,
        recent_files: Sequence[str] = (),
        on_update: Callable[[], None] | None = None,
    ) -> None:
        self.root = root
        self._scanner = scanner or FileScanner()
        self._config = config or SearchConfig()
        self._recent_files: list[str] = list(recent_files)
        self._on_update = on_update

        self._all_paths: list[str] = []
        self._query = ""
        self._results: list[MatchResult] = []
        self._selected_index: int | None = None
        self._is_scanning = False
        self._is_presented = False
        # Only the newest scan may install its result
        self._scan_generation = 0

        self._rerank()

    @classmethod
    def from_config(
        cls,
        root: Path,
        config: FileSeekConfig,
        *,
        recent_files: Sequence[str] = (),
        on_update: Callable[[], None] | None = None,
    ) -> QuickOpenController:
        return cls(
            root,
            scanner=FileScanner(config.scanner),
            config=config.search,
            recent_files=recent_files,
            on_update=on_update,
        )

    # -------------------------------------------------------------------------
    # Read-only state
    # -------------------------------------------------------------------------

    @property
    def query(self) -> str:
        return self._query

    @property
    def results(self) -> list[MatchResult]:
        return list(self._results)

    @property
    def all_paths(self) -> list[str]:
        return list(self._all_paths)

    @property
    def recent_files(self) -> list[str]:
        return list(self._recent_files)

    @property
    def selected_index(self) -> int | None:
        return self._selected_index

    @property
    def is_scanning(self) -> bool:
        return self._is_scanning

    @property
    def is_presented(self) -> bool:
        return self._is_presented

    @property
    def placeholder(self) -> str | None:
        """Message to show instead of a result list, if any."""
        if self._is_scanning and not self._all_paths:
            return "Scanning files…"
        if not self._query and not self._recent_files:
            return "Type to search files"
        return None

    # -------------------------------------------------------------------------
    # Scanning
    # -------------------------------------------------------------------------

    async def refresh(self) -> list[str]:
        """Rescan the root and re-rank against the new path set.

        If another refresh starts before this one finishes, this result is
        discarded and the newer one wins.
        """
        self._scan_generation += 1
        generation = self._scan_generation
        self._is_scanning = True
        try:
            paths = await self._scanner.scan(self.root)
        finally:
            if generation == self._scan_generation:
                self._is_scanning = False

        if generation != self._scan_generation:
            logger.debug("scan_superseded", root=str(self.root), generation=generation)
            return paths

        self._all_paths = paths
        self._rerank()
        self._notify()
        return paths

    def close(self) -> None:
        self._scanner.close()

    # -------------------------------------------------------------------------
    # Query and recents
    # -------------------------------------------------------------------------

    def set_query(self, query: str) -> None:
        if query == self._query:
            return
        self._query = query
        if query:
            if self._selected_index is None:
                self._selected_index = 0
        else:
            self._selected_index = 0 if self._recent_files else None
        self._rerank()
        self._notify()

    def set_recent_files(self, recent_files: Sequence[str]) -> None:
        self._recent_files = list(recent_files)
        if not self._query:
            self._rerank()
            self._notify()

    def record_recent(self, path: str) -> None:
        """Move ``path`` (relative to root) to the front of the recent list."""
        recents = [p for p in self._recent_files if p != path]
        recents.insert(0, path)
        self.set_recent_files(recents)

    # -------------------------------------------------------------------------
    # Overlay and selection
    # -------------------------------------------------------------------------

    def present(self) -> None:
        self._is_presented = True
        if self._recent_files:
            self._selected_index = 0
        self._notify()

    def dismiss(self) -> None:
        self._is_presented = False
        self._query = ""
        self._selected_index = None
        self._rerank()
        self._notify()

    def move_selection(self, *, up: bool) -> None:
        """Move the highlight one row, wrapping at both ends."""
        count = len(self._results)
        if count == 0:
            return
        current = self._selected_index
        if up:
            if current is None:
                current = count
            self._selected_index = count - 1 if current == 0 else current - 1
        else:
            if current is None or current >= count - 1:
                self._selected_index = 0
            else:
                self._selected_index = current + 1
        self._notify()

    def submit(self) -> Path | None:
        """Open the highlighted result (first if none) and dismiss."""
        if not self._results:
            return None
        index = min(self._selected_index or 0, len(self._results) - 1)
        return self._pick(self._results[index])

    def select_index(self, index: int) -> Path | None:
        """Quick-pick a visible row by position; out of range does nothing."""
        if not 0 <= index < len(self._results):
            return None
        return self._pick(self._results[index])

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _pick(self, result: MatchResult) -> Path:
        path = self.root / result.path
        self.dismiss()
        return path

    def _rerank(self) -> None:
        if not self._query:
            shown = self._recent_files[: self._config.recent_files_shown]
            self._results = [MatchResult(path=p, score=0) for p in shown]
        else:
            self._results = rank(self._query, self._all_paths, self._config.max_results)

    def _notify(self) -> None:
        if self._on_update is not None:
            self._on_update()
