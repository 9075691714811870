"""Audit logging of tool calls.

Append-only JSON Lines: one ``request`` event when a tool call arrives and
one ``response`` event when it finishes, correlated by a request id.
"""

from __future__ import annotations

import json
import re
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Patterns for sensitive argument keys
SENSITIVE_PATTERNS = [
    re.compile(r"password", re.IGNORECASE),
    re.compile(r"secret", re.IGNORECASE),
    re.compile(r"api[_-]?key", re.IGNORECASE),
    re.compile(r"token", re.IGNORECASE),
    re.compile(r"credential", re.IGNORECASE),
]

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"
STATUS_INVALID_PARAMS = "invalid_params"


def _is_sensitive_key(key: str) -> bool:
    """Check if a key name indicates sensitive data."""
    return any(pattern.search(key) for pattern in SENSITIVE_PATTERNS)


def sanitize_arguments(arguments: Any) -> Any:
    """Redact values stored under sensitive keys, recursively.

    Non-dict arguments (a client may send anything) are logged as is.
    """
    if not isinstance(arguments, dict):
        return arguments

    sanitized = {}
    for key, value in arguments.items():
        if _is_sensitive_key(str(key)):
            sanitized[key] = "[REDACTED]"
        else:
            sanitized[key] = sanitize_arguments(value)
    return sanitized


def _get_timestamp() -> str:
    """Get current UTC timestamp in ISO 8601 format."""
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


class AuditLogger:
    """Append-only audit logger with JSON Lines format.

    The log file is flushed after each write.
    """

    def __init__(self, log_path: Path) -> None:
        """Initialize the audit logger.

        Args:
            log_path: Path to the audit log file.
        """
        self._log_path = log_path
        self._log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(log_path, "a", encoding="utf-8")  # noqa: SIM115

    def _write_line(self, data: dict[str, Any]) -> None:
        """Write a JSON line to the log file and flush."""
        self._file.write(json.dumps(data, default=str) + "\n")
        self._file.flush()

    def log_request(self, request_id: str, tool_name: str, arguments: Any) -> None:
        """Log an incoming tool call.

        Args:
            request_id: Unique identifier for this call.
            tool_name: Name of the tool being invoked.
            arguments: Tool arguments (will be sanitized).
        """
        self._write_line(
            {
                "type": "request",
                "timestamp": _get_timestamp(),
                "request_id": request_id,
                "tool_name": tool_name,
                "arguments": sanitize_arguments(arguments),
            }
        )

    def log_response(self, request_id: str, status: str, duration_ms: float) -> None:
        """Log the outcome of a tool call.

        Args:
            request_id: Request identifier to correlate with.
            status: One of success, error, invalid_params.
            duration_ms: Execution time in milliseconds.
        """
        self._write_line(
            {
                "type": "response",
                "timestamp": _get_timestamp(),
                "request_id": request_id,
                "result_status": status,
                "execution_time_ms": duration_ms,
            }
        )

    def close(self) -> None:
        """Close the log file."""
        if self._file and not self._file.closed:
            self._file.close()

    def __enter__(self) -> AuditLogger:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        self.close()
