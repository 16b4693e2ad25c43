"""Tests for quickopen/controller.py."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from fileseek.config.models import FileSeekConfig, ScannerConfig, SearchConfig
from fileseek.files.scanner import FileScanner
from fileseek.quickopen.controller import QuickOpenController

PATHS = ["src/main.go", "src/utils.go", "README.md"]


class StubScanner:
    """Returns canned path lists, optionally after a delay."""

    def __init__(self, *results: list[str], delays: tuple[float, ...] = ()) -> None:
        self._results = list(results)
        self._delays = list(delays)
        self.calls = 0
        self.closed = False

    async def scan(self, root: Path) -> list[str]:  # noqa: ARG002
        index = self.calls
        self.calls += 1
        if index < len(self._delays):
            await asyncio.sleep(self._delays[index])
        return self._results[min(index, len(self._results) - 1)]

    def close(self) -> None:
        self.closed = True


def _controller(
    tmp_path: Path,
    scanner: StubScanner | None = None,
    **kwargs: object,
) -> QuickOpenController:
    return QuickOpenController(tmp_path, scanner=scanner or StubScanner(PATHS), **kwargs)  # type: ignore[arg-type]


class TestEmptyQuery:
    """Recent files stand in for results while the query is empty."""

    def test_no_recents_no_results(self, tmp_path: Path) -> None:
        controller = _controller(tmp_path)

        assert controller.results == []
        assert controller.selected_index is None
        assert controller.placeholder == "Type to search files"

    def test_recent_files_shown_with_zero_score(self, tmp_path: Path) -> None:
        controller = _controller(tmp_path, recent_files=["b.go", "a.go"])

        results = controller.results
        assert [r.path for r in results] == ["b.go", "a.go"]
        assert all(r.score == 0 and r.matched_indices == () for r in results)
        assert controller.placeholder is None

    def test_recent_files_capped(self, tmp_path: Path) -> None:
        recents = [f"f{i}.go" for i in range(20)]
        controller = _controller(tmp_path, recent_files=recents)

        assert [r.path for r in controller.results] == recents[:9]

    def test_recent_files_cap_from_config(self, tmp_path: Path) -> None:
        controller = _controller(
            tmp_path,
            recent_files=["a", "b", "c"],
            config=SearchConfig(recent_files_shown=2),
        )

        assert len(controller.results) == 2

    def test_record_recent_moves_to_front(self, tmp_path: Path) -> None:
        controller = _controller(tmp_path, recent_files=["a.go", "b.go", "c.go"])

        controller.record_recent("c.go")
        controller.record_recent("new.go")

        assert controller.recent_files == ["new.go", "c.go", "a.go", "b.go"]
        assert controller.results[0].path == "new.go"


class TestRefresh:
    """Scanning and result installation."""

    @pytest.mark.asyncio
    async def test_refresh_installs_paths_and_notifies(self, tmp_path: Path) -> None:
        updates: list[int] = []
        controller = _controller(tmp_path, on_update=lambda: updates.append(1))

        paths = await controller.refresh()

        assert paths == PATHS
        assert controller.all_paths == PATHS
        assert not controller.is_scanning
        assert updates

    @pytest.mark.asyncio
    async def test_is_scanning_while_scan_runs(self, tmp_path: Path) -> None:
        controller = _controller(tmp_path, StubScanner(PATHS, delays=(0.05,)))

        task = asyncio.create_task(controller.refresh())
        await asyncio.sleep(0.01)

        assert controller.is_scanning
        assert controller.placeholder == "Scanning files…"

        await task
        assert not controller.is_scanning

    @pytest.mark.asyncio
    async def test_latest_scan_wins(self, tmp_path: Path) -> None:
        """A slow earlier scan can't overwrite a newer result."""
        scanner = StubScanner(["old.go"], ["new.go"], delays=(0.05, 0.0))
        controller = _controller(tmp_path, scanner)

        slow = asyncio.create_task(controller.refresh())
        await asyncio.sleep(0)
        await controller.refresh()
        await slow

        assert controller.all_paths == ["new.go"]
        assert not controller.is_scanning

    @pytest.mark.asyncio
    async def test_refresh_reranks_current_query(self, tmp_path: Path) -> None:
        controller = _controller(tmp_path)
        controller.set_query("mago")
        assert controller.results == []

        await controller.refresh()

        assert [r.path for r in controller.results] == ["src/main.go"]

    def test_close_releases_scanner(self, tmp_path: Path) -> None:
        scanner = StubScanner(PATHS)
        controller = _controller(tmp_path, scanner)

        controller.close()

        assert scanner.closed


class TestQuery:
    """Query changes drive ranking and selection."""

    @pytest.mark.asyncio
    async def test_end_to_end_mago(self, tmp_path: Path) -> None:
        controller = _controller(tmp_path)
        await controller.refresh()

        controller.set_query("mago")

        results = controller.results
        assert len(results) == 1
        assert results[0].path == "src/main.go"
        assert results[0].score == 16

    @pytest.mark.asyncio
    async def test_max_results_from_config(self, tmp_path: Path) -> None:
        controller = _controller(tmp_path, config=SearchConfig(max_results=1))
        await controller.refresh()

        controller.set_query("s")

        assert len(controller.results) == 1

    def test_typing_selects_first_row(self, tmp_path: Path) -> None:
        controller = _controller(tmp_path)

        controller.set_query("m")

        assert controller.selected_index == 0

    @pytest.mark.asyncio
    async def test_typing_keeps_existing_selection(self, tmp_path: Path) -> None:
        controller = _controller(tmp_path)
        await controller.refresh()
        controller.set_query("s")
        controller.move_selection(up=False)

        controller.set_query("sr")

        assert controller.selected_index == 1

    def test_clearing_query_selects_first_recent(self, tmp_path: Path) -> None:
        controller = _controller(tmp_path, recent_files=["a.go"])
        controller.set_query("x")

        controller.set_query("")

        assert controller.selected_index == 0

    def test_clearing_query_without_recents_clears_selection(self, tmp_path: Path) -> None:
        controller = _controller(tmp_path)
        controller.set_query("x")

        controller.set_query("")

        assert controller.selected_index is None

    def test_unchanged_query_does_not_notify(self, tmp_path: Path) -> None:
        updates: list[int] = []
        controller = _controller(tmp_path, on_update=lambda: updates.append(1))
        controller.set_query("a")
        updates.clear()

        controller.set_query("a")

        assert updates == []


class TestSelection:
    """Arrow keys, Enter and numbered quick-picks."""

    @pytest.fixture
    def controller(self, tmp_path: Path) -> QuickOpenController:
        return _controller(tmp_path, recent_files=["a.go", "b.go", "c.go"])

    def test_down_wraps_to_top(self, controller: QuickOpenController) -> None:
        controller.present()
        controller.move_selection(up=False)
        controller.move_selection(up=False)
        assert controller.selected_index == 2

        controller.move_selection(up=False)

        assert controller.selected_index == 0

    def test_up_wraps_to_bottom(self, controller: QuickOpenController) -> None:
        controller.present()

        controller.move_selection(up=True)

        assert controller.selected_index == 2

    def test_no_selection_down_goes_to_top(self, tmp_path: Path) -> None:
        controller = _controller(tmp_path, recent_files=["a.go", "b.go"])
        controller.move_selection(up=False)
        assert controller.selected_index == 0

    def test_no_selection_up_goes_to_bottom(self, tmp_path: Path) -> None:
        controller = _controller(tmp_path, recent_files=["a.go", "b.go"])
        controller.move_selection(up=True)
        assert controller.selected_index == 1

    def test_move_with_no_results_is_noop(self, tmp_path: Path) -> None:
        controller = _controller(tmp_path)
        controller.move_selection(up=False)
        assert controller.selected_index is None

    def test_submit_returns_absolute_path_and_dismisses(
        self, controller: QuickOpenController, tmp_path: Path
    ) -> None:
        controller.present()
        controller.move_selection(up=False)

        picked = controller.submit()

        assert picked == tmp_path / "b.go"
        assert not controller.is_presented
        assert controller.query == ""
        assert controller.selected_index is None

    @pytest.mark.asyncio
    async def test_submit_clamps_stale_selection(self, tmp_path: Path) -> None:
        controller = _controller(tmp_path)
        await controller.refresh()
        controller.set_query("s")
        controller.move_selection(up=True)  # last of two rows
        controller.set_query("main")  # one row left

        picked = controller.submit()

        assert picked == tmp_path / "src/main.go"

    def test_submit_without_results(self, tmp_path: Path) -> None:
        assert _controller(tmp_path).submit() is None

    def test_select_index(self, controller: QuickOpenController, tmp_path: Path) -> None:
        assert controller.select_index(2) == tmp_path / "c.go"

    @pytest.mark.parametrize("index", [3, 8, -1])
    def test_select_index_out_of_range(
        self, controller: QuickOpenController, index: int
    ) -> None:
        controller.present()

        assert controller.select_index(index) is None
        assert controller.is_presented

    def test_present_selects_first_recent(self, controller: QuickOpenController) -> None:
        controller.present()

        assert controller.is_presented
        assert controller.selected_index == 0

    def test_dismiss_resets_query(self, controller: QuickOpenController) -> None:
        controller.present()
        controller.set_query("b")

        controller.dismiss()

        assert controller.query == ""
        assert controller.selected_index is None
        assert [r.path for r in controller.results] == ["a.go", "b.go", "c.go"]


class TestWithRealScanner:
    """Controller over a real directory walk."""

    @pytest.mark.asyncio
    async def test_from_config_scans_and_ranks(self, project_tree: Path) -> None:
        config = FileSeekConfig(scanner=ScannerConfig(use_git=False))
        controller = QuickOpenController.from_config(project_tree, config)
        try:
            await controller.refresh()
            controller.set_query("mago")
        finally:
            controller.close()

        assert controller.results[0].path == "src/main.go"
        assert controller.submit() == project_tree / "src" / "main.go"

    def test_default_scanner(self, tmp_path: Path) -> None:
        controller = QuickOpenController(tmp_path)
        assert isinstance(controller._scanner, FileScanner)
