"""MCP tools/list and tools/call handlers.

Handles tool-related MCP requests, routing them through the plugin dispatcher.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from google_tasks_mcp.plugins.base import ToolResult
from google_tasks_mcp.plugins.dispatcher import ToolDispatcher, ToolExecutionError, ToolNotFoundError
from google_tasks_mcp.protocol.jsonrpc import INVALID_PARAMS, JsonRpcError


@dataclass
class ToolsListResult:
    """Result of tools/list request."""

    tools: list[dict[str, Any]]

    def to_dict(self) -> dict[str, Any]:
        """Convert to MCP result format.

        Returns:
            Dictionary in MCP tools/list result format.
        """
        return {"tools": self.tools}


@dataclass
class ToolCall:
    """Decoded tools/call envelope."""

    name: str
    arguments: Any = None

    @classmethod
    def from_params(cls, params: Any) -> ToolCall:
        """Decode ``{"name": ..., "arguments": ...}``.

        Raises:
            JsonRpcError: If params is not an object or name is not a string.
        """
        if not isinstance(params, dict):
            raise JsonRpcError(INVALID_PARAMS, "Invalid params", "params must be a JSON object")

        name = params.get("name", "")
        if not isinstance(name, str):
            raise JsonRpcError(INVALID_PARAMS, "Invalid params", "name must be a string")

        return cls(name=name, arguments=params.get("arguments"))


class ToolsHandler:
    """Handles tools/list and tools/call MCP requests.

    Routes requests through the plugin dispatcher and formats
    results according to MCP specification.
    """

    def __init__(self, dispatcher: ToolDispatcher) -> None:
        """Initialize the handler.

        Args:
            dispatcher: Tool dispatcher for routing calls.
        """
        self._dispatcher = dispatcher

    def handle_list(self) -> ToolsListResult:
        """Handle tools/list request.

        Returns:
            ToolsListResult with all available tools.
        """
        tools = self._dispatcher.list_tools()
        return ToolsListResult(tools=tools)

    def handle_call(self, call: ToolCall) -> ToolResult:
        """Handle tools/call request.

        Args:
            call: Decoded tool call.

        Returns:
            ToolResult with execution result.

        Raises:
            JsonRpcError: If the tool is unknown or its arguments are invalid.
        """
        try:
            return self._dispatcher.call_tool(call.name, call.arguments)
        except ToolNotFoundError as e:
            raise JsonRpcError(INVALID_PARAMS, str(e)) from e
        except ToolExecutionError as e:
            return ToolResult.text(f"Tool execution failed: {e}", is_error=True)
