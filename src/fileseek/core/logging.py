"""structlog setup for fseek and embedding applications.

Every record goes through stdlib logging so file handles are managed by
``logging.FileHandler``. Each configured output gets its own renderer (JSON
or console) and level. Console outputs go quiet while a rich spinner owns
the terminal; file outputs never do.

The first file destination is remembered so CLI warnings can point at it
(``fseek watch`` does this when it gives up on a file).
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from fileseek.config.models import LoggingConfig, LogOutputConfig

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Loggers that report every raw notification batch at DEBUG
_NOISY_LOGGERS = ("watchfiles.main", "watchfiles.watcher")

_log_file_path: Path | None = None


def get_log_file_path() -> Path | None:
    """First file destination of the last ``configure_logging`` call, if any."""
    return _log_file_path


class ConsoleSuppressingFilter(logging.Filter):
    """Drops console records while a spinner is running."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: ARG002
        # progress imports rich; keep it out of import time here
        from fileseek.core.progress import is_console_suppressed

        return not is_console_suppressed()


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Route structlog through stdlib logging.

    Without ``config``, logs go to stderr at ``level``, as JSON if
    ``json_format`` is set. Calling again replaces all handlers.
    """
    global _log_file_path
    from fileseek.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    root_level = _LEVELS.get(config.level.upper(), logging.INFO)
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration must reach loggers bound at import time
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(root_level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _log_file_path = None
    for output in config.outputs:
        is_console = output.destination in ("stderr", "stdout")
        if not is_console and _log_file_path is None:
            _log_file_path = Path(output.destination)

        handler = _handler_for(output.destination, is_console=is_console)
        handler.setLevel(_LEVELS.get((output.level or config.level).upper(), root_level))
        handler.setFormatter(_formatter_for(output, pre_chain, is_console=is_console))
        root.addHandler(handler)


def _handler_for(destination: str, *, is_console: bool) -> logging.Handler:
    handler: logging.Handler
    if destination == "stderr":
        handler = logging.StreamHandler(sys.stderr)
    elif destination == "stdout":
        handler = logging.StreamHandler(sys.stdout)
    else:
        path = Path(destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a")

    if is_console:
        handler.addFilter(ConsoleSuppressingFilter())
    return handler


def _formatter_for(
    output: LogOutputConfig,
    pre_chain: list[structlog.types.Processor],
    *,
    is_console: bool,
) -> logging.Formatter:
    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=is_console and sys.stderr.isatty(),
            pad_event_to=0,
            pad_level=False,
        )
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger  # type: ignore[no-any-return]
