"""Routing of tools/call requests to the plugin that owns the tool.

The catalog is fixed once plugins are registered at startup: tools are
listed in registration order (the task tools first) and a name can only
be owned by one plugin.
"""

from __future__ import annotations

from typing import Any

from google_tasks_mcp.plugins.base import PluginBase, ToolDefinition, ToolResult
from google_tasks_mcp.protocol.jsonrpc import JsonRpcError


class ToolNotFoundError(Exception):
    """No registered plugin provides the requested tool."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class ToolExecutionError(Exception):
    """A tool raised something other than a domain or protocol error."""

    def __init__(self, tool_name: str, cause: Exception) -> None:
        super().__init__(f"{tool_name}: {cause}")
        self.tool_name = tool_name
        self.cause = cause


class ToolDispatcher:
    """Ordered tool catalog plus the name-to-plugin routing table."""

    def __init__(self) -> None:
        self._plugins: list[PluginBase] = []
        self._catalog: list[ToolDefinition] = []
        self._owners: dict[str, PluginBase] = {}

    def register_plugin(self, plugin: PluginBase) -> None:
        """Add a plugin's tools to the end of the catalog.

        Raises:
            ValueError: If one of its tool names is already registered.
        """
        tools = plugin.get_tools()
        for tool in tools:
            owner = self._owners.get(tool.name)
            if owner is not None:
                raise ValueError(f"Tool {tool.name!r} already provided by plugin {owner.name!r}")

        self._plugins.append(plugin)
        for tool in tools:
            self._catalog.append(tool)
            self._owners[tool.name] = plugin

    @property
    def tool_names(self) -> list[str]:
        """Registered tool names in catalog order."""
        return [tool.name for tool in self._catalog]

    def list_tools(self) -> list[dict[str, Any]]:
        """Return the catalog in tools/list format."""
        return [tool.to_dict() for tool in self._catalog]

    def call_tool(self, tool_name: str, arguments: Any) -> ToolResult:
        """Run ``tool_name`` on its owning plugin.

        Domain failures come back inside the ``ToolResult``; argument
        problems propagate as ``JsonRpcError``.

        Raises:
            ToolNotFoundError: If no plugin owns the tool.
            JsonRpcError: If the plugin rejected the arguments.
            ToolExecutionError: If the plugin failed unexpectedly.
        """
        plugin = self._owners.get(tool_name)
        if plugin is None:
            raise ToolNotFoundError(tool_name)

        try:
            return plugin.execute(tool_name, arguments)
        except JsonRpcError:
            raise
        except Exception as e:
            raise ToolExecutionError(tool_name, e) from e

    def cleanup(self) -> None:
        """Release every plugin's resources, the task backend included."""
        for plugin in self._plugins:
            plugin.cleanup()
