"""Task storage backends."""

from google_tasks_mcp.backend.base import (
    DEFAULT_TASKLIST_ID,
    STATUS_COMPLETED,
    STATUS_NEEDS_ACTION,
    UNSET,
    Task,
    TaskList,
    TasksBackend,
    TaskUpdates,
)

__all__ = [
    "DEFAULT_TASKLIST_ID",
    "STATUS_COMPLETED",
    "STATUS_NEEDS_ACTION",
    "Task",
    "TaskList",
    "TaskUpdates",
    "TasksBackend",
    "UNSET",
]
