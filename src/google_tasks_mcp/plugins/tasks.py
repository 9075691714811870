"""Task management tools.

Each tool decodes its arguments, calls the backend once, and renders the
outcome as text. Backend and due-date failures become ``isError``
results; argument problems propagate as ``JsonRpcError``.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import tzinfo
from typing import Any

from google_tasks_mcp import SERVER_VERSION
from google_tasks_mcp.backend.base import TasksBackend
from google_tasks_mcp.exceptions import TasksError
from google_tasks_mcp.plugins import formatting
from google_tasks_mcp.plugins.arguments import (
    decode_create_task,
    decode_list_tasks,
    decode_task_ref,
    decode_update_task,
    load_arguments,
)
from google_tasks_mcp.plugins.base import PluginBase, ToolDefinition, ToolResult
from google_tasks_mcp.plugins.registry import (
    COMPLETE_TASK,
    CREATE_TASK,
    DELETE_TASK,
    LIST_TASK_LISTS,
    LIST_TASKS,
    TOOLS,
    UPDATE_TASK,
)


class TasksPlugin(PluginBase):
    """Provides the six task tools on top of a ``TasksBackend``."""

    def __init__(self, backend: TasksBackend, zone: tzinfo | None = None) -> None:
        """Initialize the plugin.

        Args:
            backend: Task store to operate on.
            zone: Display zone for due dates (defaults to UTC).
        """
        self._backend = backend
        self._zone = zone
        self._handlers: dict[str, Callable[[dict[str, Any]], str]] = {
            LIST_TASK_LISTS: self._list_task_lists,
            LIST_TASKS: self._list_tasks,
            CREATE_TASK: self._create_task,
            UPDATE_TASK: self._update_task,
            COMPLETE_TASK: self._complete_task,
            DELETE_TASK: self._delete_task,
        }
        self._schemas = {tool.name: tool.input_schema for tool in TOOLS}

    @property
    def name(self) -> str:
        """Return plugin identifier."""
        return "tasks"

    @property
    def version(self) -> str:
        """Return plugin version."""
        return SERVER_VERSION

    def get_tools(self) -> list[ToolDefinition]:
        """Return the task tools in catalog order."""
        return list(TOOLS)

    def execute(self, tool_name: str, arguments: Any) -> ToolResult:
        """Execute a task tool.

        Args:
            tool_name: Name of the tool to execute.
            arguments: Raw arguments from the client.

        Returns:
            ToolResult with the rendered outcome.

        Raises:
            JsonRpcError: If the arguments are invalid.
        """
        handler = self._handlers.get(tool_name)
        if handler is None:
            return ToolResult.text(f"Unknown tool: {tool_name}", is_error=True)

        args = load_arguments(arguments, self._schemas[tool_name])
        try:
            return ToolResult.text(handler(args))
        except TasksError as e:
            return formatting.error_result(e)

    def cleanup(self) -> None:
        """Close the backend."""
        self._backend.close()

    def _list_task_lists(self, args: dict[str, Any]) -> str:
        return formatting.format_task_lists(self._backend.list_task_lists())

    def _list_tasks(self, args: dict[str, Any]) -> str:
        request = decode_list_tasks(args)
        tasks = self._backend.list_tasks(request.tasklist_id, request.show_completed)
        return formatting.format_tasks(tasks, self._zone)

    def _create_task(self, args: dict[str, Any]) -> str:
        request = decode_create_task(args)
        task = self._backend.create_task(
            request.tasklist_id, request.title, request.notes, request.due
        )
        return formatting.format_created(task, self._zone)

    def _update_task(self, args: dict[str, Any]) -> str:
        request = decode_update_task(args)
        task = self._backend.update_task(request.tasklist_id, request.task_id, request.updates)
        return formatting.format_updated(task)

    def _complete_task(self, args: dict[str, Any]) -> str:
        request = decode_task_ref(args)
        task = self._backend.complete_task(request.tasklist_id, request.task_id)
        return formatting.format_completed(task)

    def _delete_task(self, args: dict[str, Any]) -> str:
        request = decode_task_ref(args)
        self._backend.delete_task(request.tasklist_id, request.task_id)
        return formatting.TASK_DELETED
