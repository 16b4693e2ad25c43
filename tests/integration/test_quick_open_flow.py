"""End-to-end: scan a git project, find a file, open it, reload on external edit."""

import asyncio
from pathlib import Path

import pytest

from fileseek.config.models import FileSeekConfig
from fileseek.editor.session import EditingSession, OpenFile
from fileseek.quickopen.controller import QuickOpenController

pytestmark = pytest.mark.integration


class TestQuickOpenFlow:
    """Quick open feeding an editing session."""

    @pytest.mark.asyncio
    async def test_find_open_and_reload(self, git_project: Path) -> None:
        # Given a controller over a real git work tree
        config = FileSeekConfig()
        controller = QuickOpenController.from_config(git_project, config)
        reloaded: list[OpenFile] = []
        reload_seen = asyncio.Event()

        def on_reload(file: OpenFile) -> None:
            reloaded.append(file)
            reload_seen.set()

        session = EditingSession(git_project, watcher_config=config.watcher, on_reload=on_reload)

        try:
            # When the project is scanned and queried
            paths = await controller.refresh()
            controller.present()
            controller.set_query("main")

            # Then ignored files are absent and the match is on top
            assert "debug.log" not in paths
            assert "build/out.bin" not in paths
            assert controller.results[0].path == "src/main.go"

            # When the top result is opened
            target = controller.submit()
            assert target == git_project / "src" / "main.go"
            controller.record_recent("src/main.go")
            opened = await session.open(target)

            assert opened.content == "package main\n"
            assert not controller.is_presented
            assert [r.path for r in controller.results] == ["src/main.go"]

            # When the file changes outside the editor
            await asyncio.sleep(0.3)
            target.write_text("package main\n\nfunc main() {}\n")
            await asyncio.wait_for(reload_seen.wait(), timeout=5.0)

            # Then the open file picks up the new content
            assert session.current is not None
            assert session.current.content == "package main\n\nfunc main() {}\n"
            assert session.current.content_version >= 1
            assert reloaded[-1] is session.current
        finally:
            session.close()
            controller.close()
