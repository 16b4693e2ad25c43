"""Single-file watcher for the file being edited.

Design:
- One native watch (watchfiles, non-recursive) on the target file itself
- Writes restart a short debounce window; only the last write of a burst
  reports a change
- ``suppress_next()`` swallows the change caused by our own save
- Delete/rename (atomic saves, checkouts) drops the watch and probes for the
  path every ``reconnect_interval_sec``; once it reopens, the watch is
  re-attached and one change is reported, since content may differ
- After ``max_reconnect_attempts`` failed probes the watcher stops quietly

Every state change, timer and the suppress counter is touched only on the
event loop that called ``start()``. That loop is also where ``on_change``
is delivered.
"""

from __future__ import annotations

import asyncio
import contextlib
import os
import threading
from collections.abc import AsyncGenerator, Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Protocol

import structlog
from watchfiles import Change, awatch

from fileseek.config.constants import (
    DEBOUNCE_SEC,
    MAX_RECONNECT_ATTEMPTS,
    NOTIFY_DEBOUNCE_MS,
    NOTIFY_STEP_MS,
    RECONNECT_INTERVAL_SEC,
)
from fileseek.config.models import WatcherConfig

logger = structlog.get_logger()


class WatchEvent(Enum):
    """Event kinds the watcher reacts to."""

    WRITE = "write"
    GONE = "gone"  # deleted, renamed away, or otherwise revoked


class WatchHandle(Protocol):
    """An open watch on one file."""

    def events(self) -> AsyncGenerator[WatchEvent, None]: ...

    def close(self) -> None: ...


# =============================================================================
# Native notifications
# =============================================================================


class NotifyHandle:
    """watchfiles-backed watch on a single file."""

    def __init__(
        self,
        path: Path,
        *,
        step_ms: int = NOTIFY_STEP_MS,
        debounce_ms: int = NOTIFY_DEBOUNCE_MS,
    ) -> None:
        self.path = path
        self._step_ms = step_ms
        self._debounce_ms = debounce_ms
        self._stop_event = asyncio.Event()

    async def events(self) -> AsyncGenerator[WatchEvent, None]:
        try:
            async for changes in awatch(
                self.path,
                watch_filter=None,  # the default filter drops editor swap/backup names
                debounce=self._debounce_ms,
                step=self._step_ms,
                stop_event=self._stop_event,
                recursive=False,
                ignore_permission_denied=True,
            ):
                if any(change == Change.deleted for change, _ in changes):
                    yield WatchEvent.GONE
                    return
                yield WatchEvent.WRITE
        except FileNotFoundError:
            # Vanished between open and watch registration
            yield WatchEvent.GONE

    def close(self) -> None:
        self._stop_event.set()


def probe_path(path: Path) -> bool:
    """Open ``path`` read-only and close it again. True if that worked."""
    try:
        fd = os.open(path, os.O_RDONLY)
    except OSError:
        return False
    os.close(fd)
    return True


def open_notify_handle(path: Path) -> NotifyHandle:
    """Open a native watch. Raises OSError if ``path`` can't be opened."""
    fd = os.open(path, os.O_RDONLY)
    os.close(fd)
    return NotifyHandle(path)


# =============================================================================
# Watcher state
# =============================================================================


@dataclass(frozen=True, slots=True)
class Idle:
    """Created, never started."""


@dataclass(slots=True)
class Watching:
    """Attached to the file; at most one pending debounce timer."""

    handle: WatchHandle
    pump: asyncio.Task[None]
    debounce: asyncio.TimerHandle | None = None


@dataclass(slots=True)
class Reconnecting:
    """Detached; probing for the path on a timer."""

    timer: asyncio.TimerHandle | None = None
    attempts: int = 0


@dataclass(frozen=True, slots=True)
class Stopped:
    """Terminal until ``start()``. ``gave_up`` marks an exhausted reconnect."""

    gave_up: bool = False


WatcherState = Idle | Watching | Reconnecting | Stopped


class FileWatcher:
    """Watches one file for external modification.

    Usage::

        watcher = FileWatcher(path, on_change=reload)
        watcher.start()          # inside a running event loop
        ...
        watcher.suppress_next()  # right before our own write
        path.write_text(text)
        ...
        watcher.stop()

    ``on_change`` takes no arguments. After ``stop()`` returns it is never
    called again, even for changes that were already queued.
    """

    def __init__(
        self,
        path: Path,
        on_change: Callable[[], None],
        *,
        debounce_sec: float = DEBOUNCE_SEC,
        reconnect_interval_sec: float = RECONNECT_INTERVAL_SEC,
        max_reconnect_attempts: int = MAX_RECONNECT_ATTEMPTS,
        opener: Callable[[Path], WatchHandle] = open_notify_handle,
        probe: Callable[[Path], bool] = probe_path,
    ) -> None:
        self.path = path
        self.debounce_sec = debounce_sec
        self.reconnect_interval_sec = reconnect_interval_sec
        self.max_reconnect_attempts = max_reconnect_attempts
        self._on_change = on_change
        self._opener = opener
        self._probe = probe

        self._state: WatcherState = Idle()
        self._suppress_count = 0
        self._loop: asyncio.AbstractEventLoop | None = None
        self._loop_thread: int | None = None
        # Bumped by start/stop so queued deliveries from an older run are dropped
        self._generation = 0

    @classmethod
    def from_config(
        cls,
        path: Path,
        on_change: Callable[[], None],
        config: WatcherConfig,
        **kwargs: Any,
    ) -> FileWatcher:
        return cls(
            path,
            on_change,
            debounce_sec=config.debounce_sec,
            reconnect_interval_sec=config.reconnect_interval_sec,
            max_reconnect_attempts=config.max_reconnect_attempts,
            **kwargs,
        )

    @property
    def state(self) -> WatcherState:
        return self._state

    @property
    def is_watching(self) -> bool:
        """True while attached or trying to reattach."""
        return isinstance(self._state, (Watching, Reconnecting))

    @property
    def suppress_count(self) -> int:
        return self._suppress_count

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Attach to the file. Must be called from a running event loop."""
        if self.is_watching:
            return
        self._loop = asyncio.get_running_loop()
        self._loop_thread = threading.get_ident()
        self._generation += 1
        self._attach()

    def stop(self) -> None:
        """Cancel timers and release the watch. Idempotent."""
        state = self._state
        if isinstance(state, Watching):
            self._release(state)
        elif isinstance(state, Reconnecting):
            if state.timer is not None:
                state.timer.cancel()
        self._generation += 1
        if self.is_watching:
            logger.debug("file_watch_stopped", path=str(self.path))
        self._state = Stopped()

    def suppress_next(self) -> None:
        """Swallow the next reported change. Call right before writing the file.

        Safe from any thread; off-loop calls are queued onto the watcher's loop.
        """
        loop = self._loop
        if loop is None or loop.is_closed() or threading.get_ident() == self._loop_thread:
            self._increment_suppress()
        else:
            loop.call_soon_threadsafe(self._increment_suppress)

    # -------------------------------------------------------------------------
    # Attach / detach
    # -------------------------------------------------------------------------

    def _increment_suppress(self) -> None:
        self._suppress_count += 1

    def _attach(self) -> None:
        assert self._loop is not None
        try:
            handle = self._opener(self.path)
        except OSError as e:
            logger.debug("file_watch_open_failed", path=str(self.path), error=str(e))
            self._begin_reconnect()
            return

        pump = self._loop.create_task(self._pump(handle))
        self._state = Watching(handle=handle, pump=pump)
        logger.debug("file_watch_attached", path=str(self.path))

    def _release(self, state: Watching) -> None:
        if state.debounce is not None:
            state.debounce.cancel()
            state.debounce = None
        state.handle.close()
        if state.pump is not asyncio.current_task(self._loop):
            state.pump.cancel()

    def _owns(self, handle: WatchHandle) -> bool:
        state = self._state
        return isinstance(state, Watching) and state.handle is handle

    async def _pump(self, handle: WatchHandle) -> None:
        """Feed events from ``handle`` into the state machine until detached."""
        try:
            async with contextlib.aclosing(handle.events()) as events:
                async for event in events:
                    if not self._owns(handle):
                        return
                    self._handle_event(event)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if not self._owns(handle):
                return
            logger.error("file_watch_error", path=str(self.path), error=str(e))

        # Stream ended while still attached: the watch is lost
        if self._owns(handle):
            self._handle_event(WatchEvent.GONE)

    # -------------------------------------------------------------------------
    # Events and debounce
    # -------------------------------------------------------------------------

    def _handle_event(self, event: WatchEvent) -> None:
        state = self._state
        if not isinstance(state, Watching):
            return
        assert self._loop is not None

        if event is WatchEvent.GONE:
            logger.info("file_watch_detached", path=str(self.path))
            self._release(state)
            self._begin_reconnect()
        elif event is WatchEvent.WRITE:
            if state.debounce is not None:
                state.debounce.cancel()
            state.debounce = self._loop.call_later(self.debounce_sec, self._fire_debounce)

    def _fire_debounce(self) -> None:
        state = self._state
        if not isinstance(state, Watching):
            return
        state.debounce = None

        if self._suppress_count > 0:
            self._suppress_count -= 1
            logger.debug(
                "file_watch_event_suppressed",
                path=str(self.path),
                remaining=self._suppress_count,
            )
            return

        self._notify()

    # -------------------------------------------------------------------------
    # Reconnection
    # -------------------------------------------------------------------------

    def _begin_reconnect(self) -> None:
        assert self._loop is not None
        state = Reconnecting()
        state.timer = self._loop.call_later(self.reconnect_interval_sec, self._reconnect_tick)
        self._state = state

    def _reconnect_tick(self) -> None:
        state = self._state
        if not isinstance(state, Reconnecting):
            return
        assert self._loop is not None

        state.attempts += 1
        if state.attempts > self.max_reconnect_attempts:
            # No error reaches the editor; the log is the only trace
            logger.warning(
                "file_watch_reconnect_gave_up",
                path=str(self.path),
                attempts=self.max_reconnect_attempts,
            )
            self._state = Stopped(gave_up=True)
            return

        if not self._probe(self.path):
            state.timer = self._loop.call_later(self.reconnect_interval_sec, self._reconnect_tick)
            return

        logger.info("file_watch_reconnected", path=str(self.path), attempts=state.attempts)
        self._attach()
        self._notify()

    # -------------------------------------------------------------------------
    # Delivery
    # -------------------------------------------------------------------------

    def _notify(self) -> None:
        assert self._loop is not None
        self._loop.call_soon(self._deliver, self._generation)

    def _deliver(self, generation: int) -> None:
        if generation != self._generation:
            return
        try:
            self._on_change()
        except Exception as e:
            logger.error(
                "file_watch_callback_failed",
                path=str(self.path),
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
