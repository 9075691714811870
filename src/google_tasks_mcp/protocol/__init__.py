"""MCP protocol layer for JSON-RPC communication.

``protocol.tools`` is not re-exported here because it depends on the
plugin package, which itself imports ``protocol.jsonrpc``.
"""

from google_tasks_mcp.protocol.jsonrpc import (
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    JsonRpcError,
    JsonRpcNotification,
    JsonRpcRequest,
    format_error,
    format_response,
    parse_message,
)
from google_tasks_mcp.protocol.lifecycle import MCP_PROTOCOL_VERSION, LifecycleManager
from google_tasks_mcp.protocol.transport import StdioTransport

__all__ = [
    "INVALID_PARAMS",
    "JsonRpcError",
    "JsonRpcNotification",
    "JsonRpcRequest",
    "LifecycleManager",
    "MCP_PROTOCOL_VERSION",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
    "StdioTransport",
    "format_error",
    "format_response",
    "parse_message",
]
