"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (FILESEEK__SECTION__KEY)
3. Project YAML (<root>/.fileseek/config.yaml)
4. Global YAML (~/.config/fileseek/config.yaml)
5. Built-in defaults (this file)

Examples:
    FILESEEK__LOGGING__LEVEL=DEBUG
    FILESEEK__SCANNER__USE_GIT=false
    FILESEEK__WATCHER__DEBOUNCE_SEC=0.25
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from fileseek.config.constants import (
    DEBOUNCE_SEC,
    MAX_RECONNECT_ATTEMPTS,
    MAX_SCAN_FILES,
    MAX_SCAN_FILES_LIMIT,
    MAX_SEARCH_RESULTS,
    RECENT_FILES_SHOWN,
    RECONNECT_INTERVAL_SEC,
    SEARCH_MAX_RESULTS_LIMIT,
)
from fileseek.core.excludes import DEFAULT_IGNORED_DIRS, DEFAULT_IGNORED_FILES

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        FILESEEK__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. Degradations (git unavailable, watcher give-up) "
        "are logged at DEBUG/WARNING.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ScannerConfig(BaseModel):
    """Project scan configuration.

    Env vars:
        FILESEEK__SCANNER__MAX_FILES: Cap on paths per scan
        FILESEEK__SCANNER__USE_GIT: Try `git ls-files` before walking the tree
        FILESEEK__SCANNER__GIT_EXECUTABLE: git binary name or path
    """

    ignored_dirs: list[str] = Field(
        default_factory=lambda: sorted(DEFAULT_IGNORED_DIRS),
        description="Directory names pruned during the fallback walk (whole subtree skipped).",
    )
    ignored_files: list[str] = Field(
        default_factory=lambda: sorted(DEFAULT_IGNORED_FILES),
        description="File names never reported by the fallback walk.",
    )
    max_files: int = Field(
        default=MAX_SCAN_FILES,
        description="Stop enumerating after this many paths. Not an error condition. "
        "TRADEOFF: Higher values cost memory and ranking latency.",
    )
    use_git: bool = Field(
        default=True,
        description="List files with git when the root is inside a work tree.",
    )
    git_executable: str = Field(
        default="git",
        description="git binary (name on PATH or absolute path).",
    )

    @field_validator("max_files")
    @classmethod
    def validate_max_files(cls, v: int) -> int:
        if not (1 <= v <= MAX_SCAN_FILES_LIMIT):
            raise ValueError(f"max_files must be 1-{MAX_SCAN_FILES_LIMIT}, got {v}")
        return v


class SearchConfig(BaseModel):
    """Ranking configuration.

    Env vars:
        FILESEEK__SEARCH__MAX_RESULTS: Ranked results returned per query
        FILESEEK__SEARCH__RECENT_FILES_SHOWN: Recent files listed for an empty query
    """

    max_results: int = Field(
        default=MAX_SEARCH_RESULTS,
        description="Ranked results returned per query.",
    )
    recent_files_shown: int = Field(
        default=RECENT_FILES_SHOWN,
        description="Recent files listed when the query is empty.",
    )

    @field_validator("max_results")
    @classmethod
    def validate_max_results(cls, v: int) -> int:
        if not (1 <= v <= SEARCH_MAX_RESULTS_LIMIT):
            raise ValueError(f"max_results must be 1-{SEARCH_MAX_RESULTS_LIMIT}, got {v}")
        return v

    @field_validator("recent_files_shown")
    @classmethod
    def validate_recent_files_shown(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"recent_files_shown must be >= 0, got {v}")
        return v


class WatcherConfig(BaseModel):
    """Single-file watcher configuration.

    Env vars:
        FILESEEK__WATCHER__DEBOUNCE_SEC: Quiet window before reporting a write
        FILESEEK__WATCHER__RECONNECT_INTERVAL_SEC: Delay between reopen probes
        FILESEEK__WATCHER__MAX_RECONNECT_ATTEMPTS: Probes before giving up
    """

    debounce_sec: float = Field(
        default=DEBOUNCE_SEC,
        description="Writes closer together than this are reported once. "
        "Lower values may reload mid-save.",
    )
    reconnect_interval_sec: float = Field(
        default=RECONNECT_INTERVAL_SEC,
        description="Delay between reopen probes after delete/rename (atomic saves).",
    )
    max_reconnect_attempts: int = Field(
        default=MAX_RECONNECT_ATTEMPTS,
        description="Probes before the watcher goes silent. "
        "RISK: The give-up is only logged, never reported to the editor.",
    )

    @field_validator("debounce_sec", "reconnect_interval_sec")
    @classmethod
    def validate_positive_interval(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"Interval must be positive, got {v}")
        return v

    @field_validator("max_reconnect_attempts")
    @classmethod
    def validate_attempts(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"max_reconnect_attempts must be >= 0, got {v}")
        return v


class FileSeekConfig(BaseModel):
    """Root configuration for fileseek."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    scanner: ScannerConfig = Field(default_factory=ScannerConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    watcher: WatcherConfig = Field(default_factory=WatcherConfig)
