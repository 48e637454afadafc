"""Error kinds raised by todo.

The CLI is the only place these are caught; it turns them into a message
and a non-zero exit status.
"""

from __future__ import annotations


class TodoError(Exception):
    """Base class for all todo errors."""


class InvalidInput(TodoError):
    """A required value (such as the task description) is empty or missing."""


class InvalidDate(TodoError):
    """A due-date literal is not a YYYY-MM-DD calendar date."""


class OutOfRange(TodoError):
    """A position lies outside the list."""


class StorageError(TodoError):
    """The task list could not be read from or written to disk."""


class ConfigError(TodoError):
    """The configuration file is unreadable or invalid."""
