"""Quick-open overlay state."""

from fileseek.quickopen.controller import QuickOpenController

__all__ = ["QuickOpenController"]
