"""Config module exports."""

from fileseek.config.loader import load_config
from fileseek.config.models import (
    FileSeekConfig,
    LoggingConfig,
    LogOutputConfig,
    ScannerConfig,
    SearchConfig,
    WatcherConfig,
)

__all__ = [
    "load_config",
    "FileSeekConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ScannerConfig",
    "SearchConfig",
    "WatcherConfig",
]
