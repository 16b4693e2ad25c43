"""fileseek error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Files

The search, scan and watch paths never raise these to callers; they degrade
to empty or stale results. Errors are raised only by explicit user actions
(loading config, opening or saving a file).
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Files (3xxx)
    FILE_NOT_READABLE = 3001
    FILE_NOT_WRITABLE = 3002


@dataclass(frozen=True, slots=True)
class FileSeekError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(FileSeekError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class FileAccessError(FileSeekError):
    """Errors from explicit open/save actions on a file."""

    @classmethod
    def not_readable(cls, path: str, reason: str) -> "FileAccessError":
        return cls(
            code=ErrorCode.FILE_NOT_READABLE,
            message=f"Cannot read {path}: {reason}",
            retryable=True,
            details={"path": path, "reason": reason},
        )

    @classmethod
    def not_writable(cls, path: str, reason: str) -> "FileAccessError":
        return cls(
            code=ErrorCode.FILE_NOT_WRITABLE,
            message=f"Cannot write {path}: {reason}",
            retryable=True,
            details={"path": path, "reason": reason},
        )
