"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import itertools
from dataclasses import replace

import pytest

from google_tasks_mcp.backend.base import (
    STATUS_COMPLETED,
    UNSET,
    Task,
    TaskList,
    TasksBackend,
    TaskUpdates,
)
from google_tasks_mcp.due import encode_due
from google_tasks_mcp.exceptions import BackendError


class FakeBackend(TasksBackend):
    """In-memory task store that records every call."""

    def __init__(self, zone=None) -> None:
        self.zone = zone
        self.lists: list[TaskList] = [TaskList(id="@default", title="My Tasks")]
        self.tasks: dict[str, list[Task]] = {"@default": []}
        self.calls: list[tuple] = []
        self.fail_with: BackendError | None = None
        self.closed = False
        self._ids = itertools.count(1)

    def _check(self, *call) -> None:
        self.calls.append(call)
        if self.fail_with is not None:
            raise self.fail_with

    def _find(self, tasklist_id: str, task_id: str) -> Task:
        for task in self.tasks.get(tasklist_id, []):
            if task.id == task_id:
                return task
        raise BackendError("HTTP 404: Task not found.", status_code=404)

    def add_task(self, tasklist_id: str = "@default", **fields) -> Task:
        task = Task(id=fields.pop("id", f"task-{next(self._ids)}"), **fields)
        self.tasks.setdefault(tasklist_id, []).append(task)
        return task

    def list_task_lists(self) -> list[TaskList]:
        self._check("list_task_lists")
        return list(self.lists)

    def list_tasks(self, tasklist_id: str, show_completed: bool) -> list[Task]:
        self._check("list_tasks", tasklist_id, show_completed)
        tasks = self.tasks.get(tasklist_id, [])
        if not show_completed:
            tasks = [t for t in tasks if not t.is_completed]
        return list(tasks)

    def create_task(self, tasklist_id: str, title: str, notes: str = "", due: str = "") -> Task:
        self._check("create_task", tasklist_id, title, notes, due)
        encoded = encode_due(due, self.zone) if due else ""
        return self.add_task(tasklist_id, title=title, notes=notes, due=encoded)

    def update_task(self, tasklist_id: str, task_id: str, updates: TaskUpdates) -> Task:
        self._check("update_task", tasklist_id, task_id, updates)
        task = self._find(tasklist_id, task_id)
        changes = {}
        if updates.title is not UNSET:
            changes["title"] = updates.title
        if updates.notes is not UNSET:
            changes["notes"] = updates.notes
        if updates.due is not UNSET:
            changes["due"] = encode_due(updates.due, self.zone) if updates.due else ""
        if updates.status is not UNSET:
            changes["status"] = updates.status
            changes["completed"] = (
                "2026-01-01T00:00:00Z" if updates.status == STATUS_COMPLETED else ""
            )
        updated = replace(task, **changes)
        items = self.tasks[tasklist_id]
        items[items.index(task)] = updated
        return updated

    def delete_task(self, tasklist_id: str, task_id: str) -> None:
        self._check("delete_task", tasklist_id, task_id)
        self.tasks[tasklist_id].remove(self._find(tasklist_id, task_id))

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def backend() -> FakeBackend:
    """Provide an empty in-memory backend."""
    return FakeBackend()
