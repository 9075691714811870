"""Catalog of the task tools.

The order of ``TOOLS`` is the order clients display, so it must not
change between runs. Both ``tools/list`` and call routing read from here.
"""

from __future__ import annotations

from google_tasks_mcp.backend.base import DEFAULT_TASKLIST_ID
from google_tasks_mcp.plugins.base import ToolDefinition

LIST_TASK_LISTS = "list_task_lists"
LIST_TASKS = "list_tasks"
CREATE_TASK = "create_task"
UPDATE_TASK = "update_task"
COMPLETE_TASK = "complete_task"
DELETE_TASK = "delete_task"

DUE_FORMAT_HINT = "YYYY-MM-DD or YYYY-MM-DDTHH:MM format"


def _tasklist_property(description: str = "Task list ID") -> dict:
    return {
        "type": "string",
        "description": description,
        "default": DEFAULT_TASKLIST_ID,
    }


_DISCOVERABLE_TASKLIST_DESCRIPTION = (
    "Task list ID (use list_task_lists to find IDs, or '@default' for the default list)"
)

TOOLS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name=LIST_TASK_LISTS,
        description="List all task lists",
        input_schema={
            "type": "object",
            "properties": {},
        },
    ),
    ToolDefinition(
        name=LIST_TASKS,
        description="List tasks from a task list",
        input_schema={
            "type": "object",
            "properties": {
                "tasklist_id": _tasklist_property(_DISCOVERABLE_TASKLIST_DESCRIPTION),
                "show_completed": {
                    "type": "boolean",
                    "description": "Include completed tasks (default: false)",
                    "default": False,
                },
            },
        },
    ),
    ToolDefinition(
        name=CREATE_TASK,
        description="Create a new task",
        input_schema={
            "type": "object",
            "properties": {
                "tasklist_id": _tasklist_property(_DISCOVERABLE_TASKLIST_DESCRIPTION),
                "title": {
                    "type": "string",
                    "description": "Task title",
                },
                "notes": {
                    "type": "string",
                    "description": "Task notes/description (optional)",
                },
                "due": {
                    "type": "string",
                    "description": f"Due date in {DUE_FORMAT_HINT} (optional)",
                },
            },
            "required": ["title"],
        },
    ),
    ToolDefinition(
        name=UPDATE_TASK,
        description="Update an existing task",
        input_schema={
            "type": "object",
            "properties": {
                "tasklist_id": _tasklist_property(),
                "task_id": {
                    "type": "string",
                    "description": "Task ID to update (use list_tasks to find IDs)",
                },
                "title": {
                    "type": "string",
                    "description": "New task title (optional)",
                },
                "notes": {
                    "type": "string",
                    "description": "New task notes (optional, empty string clears)",
                },
                "due": {
                    "type": "string",
                    "description": f"New due date in {DUE_FORMAT_HINT} (optional, empty string clears)",
                },
            },
            "required": ["task_id"],
        },
    ),
    ToolDefinition(
        name=COMPLETE_TASK,
        description="Mark a task as completed",
        input_schema={
            "type": "object",
            "properties": {
                "tasklist_id": _tasklist_property(),
                "task_id": {
                    "type": "string",
                    "description": "Task ID to complete (use list_tasks to find IDs)",
                },
            },
            "required": ["task_id"],
        },
    ),
    ToolDefinition(
        name=DELETE_TASK,
        description="Delete a task",
        input_schema={
            "type": "object",
            "properties": {
                "tasklist_id": _tasklist_property(),
                "task_id": {
                    "type": "string",
                    "description": "Task ID to delete (use list_tasks to find IDs)",
                },
            },
            "required": ["task_id"],
        },
    ),
)

TOOL_NAMES: tuple[str, ...] = tuple(tool.name for tool in TOOLS)


def get_tool(name: str) -> ToolDefinition | None:
    """Look up a tool definition by name."""
    for tool in TOOLS:
        if tool.name == name:
            return tool
    return None
