"""Configuration constants.

Defaults below are the tunables' starting values (see models.py for the
user-configurable fields). The *_LIMIT values are hard caps that config may
not exceed.
"""

# =============================================================================
# Scanner
# =============================================================================

MAX_SCAN_FILES = 50_000
"""Default cap on paths returned by one scan. Bounds memory and UI latency."""

MAX_SCAN_FILES_LIMIT = 1_000_000
"""Hard ceiling for the configurable scan cap."""

GIT_LS_FILES_ARGS: tuple[str, ...] = (
    "ls-files",
    "--cached",
    "--others",
    "--exclude-standard",
    "-z",
)
"""Tracked plus untracked-but-not-ignored files, NUL separated (no path quoting)."""

# =============================================================================
# Search
# =============================================================================

MAX_SEARCH_RESULTS = 50
"""Default number of ranked results."""

SEARCH_MAX_RESULTS_LIMIT = 1000
"""Hard ceiling for the configurable result count."""

RECENT_FILES_SHOWN = 9
"""Recent files listed for an empty query (one per quick-pick slot)."""

# =============================================================================
# Watcher
# =============================================================================

DEBOUNCE_SEC = 0.1
"""Quiet window after the last write before a change is reported."""

RECONNECT_INTERVAL_SEC = 1.0
"""Delay between reopen probes after the watched file disappears."""

MAX_RECONNECT_ATTEMPTS = 10
"""Probe ticks before the watcher gives up and goes silent."""

NOTIFY_STEP_MS = 50
"""How often the native notifier checks for events (watchfiles ``step``)."""

NOTIFY_DEBOUNCE_MS = 50
"""Native notifier batching window (watchfiles ``debounce``)."""
