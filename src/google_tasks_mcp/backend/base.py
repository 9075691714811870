"""Task backend interface and data structures.

Defines the capability set the tool layer calls. Implementations raise
``BackendError`` for any failure; the tool layer reports the message
without interpreting it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Final

DEFAULT_TASKLIST_ID = "@default"

STATUS_COMPLETED = "completed"
STATUS_NEEDS_ACTION = "needsAction"


class _Unset:
    """Marker for an update field that was not supplied."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()


@dataclass(frozen=True)
class TaskList:
    """A task list as seen by the tool layer."""

    id: str
    title: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TaskList:
        """Build from a Tasks API ``TaskList`` resource."""
        return cls(id=data.get("id", ""), title=data.get("title", ""))


@dataclass(frozen=True)
class Task:
    """A task as seen by the tool layer.

    Optional fields are empty strings when the backend omits them.
    """

    id: str
    title: str
    notes: str = ""
    due: str = ""
    status: str = STATUS_NEEDS_ACTION
    completed: str = ""

    @property
    def is_completed(self) -> bool:
        """Whether the task is marked done."""
        return self.status == STATUS_COMPLETED

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """Build from a Tasks API ``Task`` resource."""
        return cls(
            id=data.get("id", ""),
            title=data.get("title", ""),
            notes=data.get("notes") or "",
            due=data.get("due") or "",
            status=data.get("status") or STATUS_NEEDS_ACTION,
            completed=data.get("completed") or "",
        )


@dataclass(frozen=True)
class TaskUpdates:
    """Field changes for an update.

    Each field has three states: ``UNSET`` leaves the stored value alone,
    an empty string clears it, and any other string replaces it.
    """

    title: str | _Unset = UNSET
    notes: str | _Unset = UNSET
    due: str | _Unset = UNSET
    status: str | _Unset = UNSET


class TasksBackend(ABC):
    """Abstract task store the tools operate on."""

    @abstractmethod
    def list_task_lists(self) -> list[TaskList]:
        """Return all task lists."""
        pass

    @abstractmethod
    def list_tasks(self, tasklist_id: str, show_completed: bool) -> list[Task]:
        """Return tasks in a list.

        Args:
            tasklist_id: Task list ID or ``@default``.
            show_completed: Whether completed tasks are included.
        """
        pass

    @abstractmethod
    def create_task(self, tasklist_id: str, title: str, notes: str = "", due: str = "") -> Task:
        """Create a task.

        Args:
            tasklist_id: Task list to insert into.
            title: Task title.
            notes: Notes, empty for none.
            due: User-format due date, empty for none.

        Returns:
            The created task.
        """
        pass

    @abstractmethod
    def update_task(self, tasklist_id: str, task_id: str, updates: TaskUpdates) -> Task:
        """Apply ``updates`` to an existing task.

        Setting the status to completed stamps the completion time;
        setting any other status clears it.

        Returns:
            The updated task.
        """
        pass

    def complete_task(self, tasklist_id: str, task_id: str) -> Task:
        """Mark a task completed."""
        return self.update_task(tasklist_id, task_id, TaskUpdates(status=STATUS_COMPLETED))

    @abstractmethod
    def delete_task(self, tasklist_id: str, task_id: str) -> None:
        """Delete a task."""
        pass

    def close(self) -> None:
        """Release any resources held by the backend."""
