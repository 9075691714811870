"""Plugin system for MCP tools."""

from google_tasks_mcp.plugins.base import PluginBase, ToolDefinition, ToolResult
from google_tasks_mcp.plugins.dispatcher import ToolDispatcher, ToolExecutionError, ToolNotFoundError
from google_tasks_mcp.plugins.tasks import TasksPlugin

__all__ = [
    "PluginBase",
    "TasksPlugin",
    "ToolDefinition",
    "ToolDispatcher",
    "ToolExecutionError",
    "ToolNotFoundError",
    "ToolResult",
]
