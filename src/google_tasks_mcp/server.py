"""MCP Server - JSON-RPC dispatcher.

Routes each incoming message independently: there is no session state,
so tools can be listed and called with or without a prior handshake.
"""

from __future__ import annotations

import time
import uuid
from datetime import tzinfo
from typing import Any

from google_tasks_mcp.audit import (
    STATUS_ERROR,
    STATUS_INVALID_PARAMS,
    STATUS_SUCCESS,
    AuditLogger,
)
from google_tasks_mcp.backend.base import TasksBackend
from google_tasks_mcp.plugins.base import PluginBase, ToolResult
from google_tasks_mcp.plugins.dispatcher import ToolDispatcher
from google_tasks_mcp.plugins.tasks import TasksPlugin
from google_tasks_mcp.protocol.jsonrpc import (
    METHOD_NOT_FOUND,
    JsonRpcError,
    JsonRpcNotification,
    JsonRpcRequest,
    format_error,
    format_response,
    parse_message,
)
from google_tasks_mcp.protocol.lifecycle import INITIALIZED_METHODS, LifecycleManager
from google_tasks_mcp.protocol.tools import ToolCall, ToolsHandler


class MCPServer:
    """MCP Server implementation.

    Handles:
    - initialize and the initialized notification
    - tools/list and tools/call for the task tools
    - JSON-RPC error reporting for malformed calls
    """

    def __init__(
        self,
        backend: TasksBackend,
        zone: tzinfo | None = None,
        audit_logger: AuditLogger | None = None,
    ) -> None:
        """Initialize the server.

        Args:
            backend: Task store the tools operate on.
            zone: Display zone for due dates (defaults to UTC).
            audit_logger: Optional audit trail for tool calls.
        """
        self._lifecycle = LifecycleManager()
        self._dispatcher = ToolDispatcher()
        self._tools_handler = ToolsHandler(self._dispatcher)
        self._audit_logger = audit_logger

        self._dispatcher.register_plugin(TasksPlugin(backend, zone))

    def register_plugin(self, plugin: PluginBase) -> None:
        """Register an additional tool plugin.

        Its tools are listed after the task tools.
        """
        self._dispatcher.register_plugin(plugin)

    def list_tools(self) -> list[dict[str, Any]]:
        """List all registered tools.

        Returns:
            List of tool definitions.
        """
        return self._dispatcher.list_tools()

    def handle_message(self, raw_message: str) -> str | None:
        """Handle an incoming JSON-RPC message.

        Args:
            raw_message: One line of JSON.

        Returns:
            Response string, or None for notifications.
        """
        try:
            message = parse_message(raw_message)
        except JsonRpcError as e:
            return format_error(None, e.code, e.message, e.data)

        if isinstance(message, JsonRpcNotification):
            return self._handle_notification(message)
        return self._handle_request(message)

    def _handle_notification(self, notification: JsonRpcNotification) -> None:
        """Handle a notification (no response, whatever the method)."""
        return None

    def _handle_request(self, request: JsonRpcRequest) -> str | None:
        """Handle a request and return its response.

        Args:
            request: The request to handle.

        Returns:
            JSON-RPC response string, or None for a handshake
            acknowledgement sent with an id.
        """
        if request.method in INITIALIZED_METHODS:
            return None

        try:
            result = self._route(request)
        except JsonRpcError as e:
            return format_error(request.id, e.code, e.message, e.data)
        return format_response(request.id, result)

    def _route(self, request: JsonRpcRequest) -> dict[str, Any]:
        method = request.method

        if method == "initialize":
            return self._lifecycle.handle_initialize(request.params)

        if method == "tools/list":
            return self._tools_handler.handle_list().to_dict()

        if method == "tools/call":
            call = ToolCall.from_params(request.params)
            return self._call_tool(call).to_dict()

        raise JsonRpcError(METHOD_NOT_FOUND, "Method not found")

    def _call_tool(self, call: ToolCall) -> ToolResult:
        """Run a tool call, recording it in the audit log if configured."""
        if self._audit_logger is None:
            return self._tools_handler.handle_call(call)

        request_id = str(uuid.uuid4())
        self._audit_logger.log_request(request_id, call.name, call.arguments)
        started = time.perf_counter()

        status = STATUS_INVALID_PARAMS
        try:
            result = self._tools_handler.handle_call(call)
            status = STATUS_ERROR if result.is_error else STATUS_SUCCESS
            return result
        finally:
            duration_ms = (time.perf_counter() - started) * 1000
            self._audit_logger.log_response(request_id, status, round(duration_ms, 3))

    def close(self) -> None:
        """Close the server and clean up resources."""
        self._dispatcher.cleanup()
        if self._audit_logger is not None:
            self._audit_logger.close()

    def __enter__(self) -> MCPServer:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        self.close()
