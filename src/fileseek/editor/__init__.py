"""Editing session for a single open file."""

from fileseek.editor.session import EditingSession, OpenFile

__all__ = ["EditingSession", "OpenFile"]
