"""The file currently being edited and the watcher that keeps it in sync."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import structlog

from fileseek.config.models import WatcherConfig
from fileseek.core.errors import FileAccessError
from fileseek.watch.watcher import FileWatcher

logger = structlog.get_logger()

WatcherFactory = Callable[[Path, Callable[[], None]], FileWatcher]


@dataclass(slots=True)
class OpenFile:
    """An open file.

    ``content_version`` increases each time the content is replaced by an
    external change, so views can tell a reload from a local edit.
    """

    path: Path
    content: str
    is_modified: bool = False
    content_version: int = 0


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _write_text(path: Path, content: str) -> None:
    path.write_text(content, encoding="utf-8")


class EditingSession:
    """Editing context for one project root.

    Holds at most one open file and exactly one watcher for it. Opening a
    different file stops the previous watcher first.
    """

    def __init__(
        self,
        root: Path,
        *,
        watcher_config: WatcherConfig | None = None,
        watcher_factory: WatcherFactory | None = None,
        on_reload: Callable[[OpenFile], None] | None = None,
    ) -> None:
        self.root = root
        self._watcher_config = watcher_config or WatcherConfig()
        self._watcher_factory = watcher_factory or self._default_watcher
        self._on_reload = on_reload
        self._current: OpenFile | None = None
        self._watcher: FileWatcher | None = None
        self._reload_task: asyncio.Task[None] | None = None

    @property
    def current(self) -> OpenFile | None:
        return self._current

    @property
    def watcher(self) -> FileWatcher | None:
        return self._watcher

    def resolve(self, path: Path | str) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.root / path

    async def open(self, path: Path | str) -> OpenFile:
        """Read ``path`` (relative paths resolve against root) and start watching it.

        Raises:
            FileAccessError: If the file can't be read as UTF-8 text.
        """
        target = self.resolve(path)
        loop = asyncio.get_running_loop()
        try:
            content = await loop.run_in_executor(None, _read_text, target)
        except (OSError, UnicodeDecodeError) as e:
            raise FileAccessError.not_readable(str(target), str(e)) from e

        self._stop_watching()
        self._current = OpenFile(path=target, content=content)
        self._watcher = self._watcher_factory(target, self._handle_external_change)
        self._watcher.start()
        logger.debug("file_opened", path=str(target), size=len(content))
        return self._current

    def close(self) -> None:
        """Stop watching and forget the open file."""
        self._stop_watching()
        self._current = None

    def update(self, content: str) -> None:
        """Apply a local edit."""
        current = self._current
        if current is None or content == current.content:
            return
        current.content = content
        current.is_modified = True

    async def save(self) -> None:
        """Write the current content, suppressing the watcher echo.

        Raises:
            FileAccessError: If the file can't be written.
        """
        current = self._current
        if current is None:
            return
        if self._watcher is not None:
            self._watcher.suppress_next()

        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, _write_text, current.path, current.content)
        except OSError as e:
            raise FileAccessError.not_writable(str(current.path), str(e)) from e
        current.is_modified = False
        logger.debug("file_saved", path=str(current.path))

    def _default_watcher(self, path: Path, on_change: Callable[[], None]) -> FileWatcher:
        return FileWatcher.from_config(path, on_change, self._watcher_config)

    def _stop_watching(self) -> None:
        if self._reload_task is not None:
            self._reload_task.cancel()
            self._reload_task = None
        if self._watcher is not None:
            self._watcher.stop()
            self._watcher = None

    def _handle_external_change(self) -> None:
        current = self._current
        if current is None:
            return
        if self._reload_task is not None and not self._reload_task.done():
            self._reload_task.cancel()
        self._reload_task = asyncio.get_running_loop().create_task(self._reload(current))

    async def _reload(self, current: OpenFile) -> None:
        loop = asyncio.get_running_loop()
        try:
            content = await loop.run_in_executor(None, _read_text, current.path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("external_reload_failed", path=str(current.path), error=str(e))
            return

        # Another file was opened, or the session closed, while reading
        if current is not self._current or content == current.content:
            return

        current.content = content
        current.content_version += 1
        current.is_modified = False
        logger.info(
            "file_reloaded",
            path=str(current.path),
            content_version=current.content_version,
        )
        if self._on_reload is not None:
            self._on_reload(current)
