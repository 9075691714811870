"""Custom exceptions for google-tasks-mcp.

Domain errors (``TasksError`` and subclasses) are reported to the client
as tool results flagged with ``isError``. Startup errors
(``ConfigError``, ``AuthError``) abort the process before the message
loop runs.
"""

from __future__ import annotations


class TasksError(Exception):
    """Base exception for failures of a well-formed tool call."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BackendError(TasksError):
    """Raised when the task backend rejects or fails an operation."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidDueFormatError(TasksError, ValueError):
    """Raised when a due date string matches neither accepted form."""

    def __init__(self, value: str):
        super().__init__(
            f'invalid due format "{value}", expected YYYY-MM-DD or YYYY-MM-DDTHH:MM'
        )
        self.value = value


class ConfigError(Exception):
    """Raised when startup configuration is missing or invalid."""

    pass


class AuthError(Exception):
    """Raised when no valid OAuth credential can be obtained."""

    pass
