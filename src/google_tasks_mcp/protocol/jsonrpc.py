"""JSON-RPC 2.0 message parsing and formatting.

Only the single-message subset used by MCP over stdio is supported:
one JSON object per line, no batches.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

# Standard JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602


class JsonRpcError(Exception):
    """JSON-RPC error with code and message."""

    def __init__(self, code: int, message: str, data: Any | None = None) -> None:
        """Initialize the error.

        Args:
            code: JSON-RPC error code.
            message: Human-readable error message.
            data: Optional additional error data.
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data


@dataclass
class JsonRpcRequest:
    """Represents a JSON-RPC request (has id).

    The id is opaque: it is echoed back exactly as received, whatever
    its JSON type.
    """

    id: Any
    method: str
    params: Any = None


@dataclass
class JsonRpcNotification:
    """Represents a JSON-RPC notification (no id)."""

    method: str
    params: Any = None


def _reject_constant(name: str) -> Any:
    """Refuse the NaN/Infinity extensions Python's decoder allows."""
    raise ValueError(f"invalid JSON constant {name}")


def parse_message(raw: str) -> JsonRpcRequest | JsonRpcNotification:
    """Parse a JSON-RPC message from a string.

    Params are kept undecoded; the target method interprets them.
    A missing or non-string method becomes an empty method name, which
    routes to "method not found" rather than failing the parse.

    Args:
        raw: Raw JSON string.

    Returns:
        Parsed request or notification.

    Raises:
        JsonRpcError: If the message is not a JSON object.
    """
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except ValueError as e:
        raise JsonRpcError(PARSE_ERROR, "Parse error", str(e)) from e

    if not isinstance(data, dict):
        raise JsonRpcError(PARSE_ERROR, "Parse error", "message must be a JSON object")

    method = data.get("method")
    if not isinstance(method, str):
        method = ""

    params = data.get("params")

    # Presence of the member, not its value, makes a request
    if "id" in data:
        return JsonRpcRequest(id=data["id"], method=method, params=params)
    return JsonRpcNotification(method=method, params=params)


def format_response(msg_id: Any, result: Any) -> str:
    """Format a successful JSON-RPC response.

    Args:
        msg_id: Request ID to echo back.
        result: Result payload.

    Returns:
        JSON string.
    """
    response = {
        "jsonrpc": "2.0",
        "id": msg_id,
        "result": result,
    }
    return json.dumps(response)


def format_error(
    msg_id: Any,
    code: int,
    message: str,
    data: Any | None = None,
) -> str:
    """Format a JSON-RPC error response.

    Args:
        msg_id: Request ID (or None for parse errors).
        code: Error code.
        message: Error message.
        data: Optional error data.

    Returns:
        JSON string.
    """
    error_obj: dict[str, Any] = {
        "code": code,
        "message": message,
    }
    if data is not None:
        error_obj["data"] = data

    response = {
        "jsonrpc": "2.0",
        "id": msg_id,
        "error": error_obj,
    }
    return json.dumps(response)
