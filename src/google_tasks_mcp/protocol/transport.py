"""Line-delimited stdio framing for MCP.

One JSON-RPC message per line in each direction. Input is decoded as
UTF-8 with undecodable bytes replaced, so a corrupt line reaches the
JSON parser (and is answered with a parse error) instead of ending the
session. Only end of input ends the session.
"""

from __future__ import annotations

import io
import sys
from typing import IO

# Stands in for a line the text layer could not decode
UNDECODABLE_LINE = "\ufffd"


def _utf8_stdin() -> IO[str]:
    """Wrap the process stdin so invalid UTF-8 never raises."""
    return io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8", errors="replace")


class StdioTransport:
    """Reads requests from stdin and writes responses to stdout.

    Diagnostics go to stderr as ``[MCP] ...`` lines so they never mix
    with protocol traffic. Injected streams may be text or binary.
    """

    def __init__(
        self,
        stdin: IO | None = None,
        stdout: IO[str] | None = None,
        stderr: IO[str] | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            stdin: Input stream, text or bytes (defaults to UTF-8 stdin).
            stdout: Protocol output stream (defaults to sys.stdout).
            stderr: Log stream (defaults to sys.stderr).
        """
        self._stdin = stdin if stdin is not None else _utf8_stdin()
        self._stdout = stdout or sys.stdout
        self._stderr = stderr or sys.stderr

    def _readline(self) -> str | None:
        """Read one raw line as text; None means the stream is finished."""
        try:
            line = self._stdin.readline()
        except UnicodeDecodeError:
            # Strict text streams: a bad line is a framing error, not EOF
            return UNDECODABLE_LINE + "\n"
        except (OSError, ValueError):
            # Closed or broken stdin ends the session like EOF
            return None

        if isinstance(line, bytes):
            line = line.decode("utf-8", errors="replace")
        return line or None

    def read_message(self) -> str | None:
        """Return the next non-blank line, stripped.

        Returns:
            Message string, or None at end of input.
        """
        while True:
            line = self._readline()
            if line is None:
                return None

            message = line.strip()
            if message:
                return message

    def write_message(self, message: str) -> None:
        """Write one response line and flush it.

        Args:
            message: Single-line JSON string.
        """
        self._stdout.write(message + "\n")
        self._stdout.flush()

    def log(self, message: str) -> None:
        """Write a diagnostic line to stderr.

        Args:
            message: Log message.
        """
        self._stderr.write(f"[MCP] {message}\n")
        self._stderr.flush()
