"""Core module exports."""

from fileseek.core.errors import (
    ConfigError,
    ErrorCode,
    FileAccessError,
    FileSeekError,
)
from fileseek.core.logging import (
    configure_logging,
    get_log_file_path,
    get_logger,
)
from fileseek.core.progress import spinner, status

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "FileAccessError",
    "FileSeekError",
    # Logging
    "configure_logging",
    "get_log_file_path",
    "get_logger",
    # Progress
    "spinner",
    "status",
]
