"""Watching the open file for external changes."""

from fileseek.watch.watcher import (
    FileWatcher,
    Idle,
    NotifyHandle,
    Reconnecting,
    Stopped,
    WatcherState,
    WatchEvent,
    WatchHandle,
    Watching,
    open_notify_handle,
    probe_path,
)

__all__ = [
    "FileWatcher",
    "Idle",
    "NotifyHandle",
    "Reconnecting",
    "Stopped",
    "WatchEvent",
    "WatchHandle",
    "WatcherState",
    "Watching",
    "open_notify_handle",
    "probe_path",
]
