"""Rendering of tool outcomes as MCP text content."""

from __future__ import annotations

from datetime import tzinfo

from google_tasks_mcp.backend.base import Task, TaskList
from google_tasks_mcp.due import decode_due
from google_tasks_mcp.plugins.base import ToolResult

NO_TASK_LISTS = "No task lists found."
NO_TASKS = "No tasks found."
TASK_DELETED = "Task deleted successfully!"


def error_result(error: Exception) -> ToolResult:
    """Wrap a failed operation as a tool result flagged with ``isError``."""
    return ToolResult.text(f"Error: {error}", is_error=True)


def format_task_lists(lists: list[TaskList]) -> str:
    if not lists:
        return NO_TASK_LISTS

    lines = [f"Found {len(lists)} task list(s):\n\n"]
    for task_list in lists:
        lines.append(f"- {task_list.title}\n  ID: {task_list.id}\n\n")
    return "".join(lines)


def format_tasks(tasks: list[Task], zone: tzinfo | None = None) -> str:
    """Render a task listing.

    Each task gets a checkbox line, optional notes and due lines, and its
    ID, followed by a blank line.
    """
    if not tasks:
        return NO_TASKS

    lines = [f"Found {len(tasks)} task(s):\n\n"]
    for task in tasks:
        checkbox = "[x]" if task.is_completed else "[ ]"
        lines.append(f"{checkbox} {task.title}\n")
        if task.notes:
            lines.append(f"  Notes: {task.notes}\n")
        if task.due:
            lines.append(f"  Due: {decode_due(task.due, zone)}\n")
        lines.append(f"  ID: {task.id}\n\n")
    return "".join(lines)


def _summary(heading: str, task: Task) -> str:
    return f"{heading}\nID: {task.id}\nTitle: {task.title}"


def format_created(task: Task, zone: tzinfo | None = None) -> str:
    text = _summary("Task created successfully!", task)
    if task.due:
        text += f"\nDue: {decode_due(task.due, zone)}"
    return text


def format_updated(task: Task) -> str:
    return _summary("Task updated successfully!", task)


def format_completed(task: Task) -> str:
    return _summary("Task completed!", task)
