"""Tests for tool output rendering."""

from datetime import timedelta, timezone

from google_tasks_mcp.backend.base import Task, TaskList
from google_tasks_mcp.exceptions import BackendError
from google_tasks_mcp.plugins.formatting import (
    error_result,
    format_completed,
    format_created,
    format_task_lists,
    format_tasks,
    format_updated,
)


class TestFormatTaskLists:
    """Tests for list_task_lists output."""

    def test_empty(self):
        """Should say nothing was found."""
        assert format_task_lists([]) == "No task lists found."

    def test_lists_titles_and_ids(self):
        """Each list gets a title line and an ID line."""
        text = format_task_lists([TaskList("L1", "Work"), TaskList("L2", "Home")])

        assert text == (
            "Found 2 task list(s):\n\n"
            "- Work\n  ID: L1\n\n"
            "- Home\n  ID: L2\n\n"
        )


class TestFormatTasks:
    """Tests for list_tasks output."""

    def test_empty(self):
        """Should say nothing was found."""
        assert format_tasks([]) == "No tasks found."

    def test_minimal_task(self):
        """A task without notes or due shows only the checkbox and ID."""
        text = format_tasks([Task(id="t1", title="Buy milk")])

        assert text == "Found 1 task(s):\n\n[ ] Buy milk\n  ID: t1\n\n"

    def test_completed_checkbox(self):
        """Completed tasks are ticked."""
        text = format_tasks([Task(id="t1", title="Done", status="completed")])

        assert "[x] Done\n" in text

    def test_notes_and_due(self):
        """Notes and due lines appear between title and ID."""
        task = Task(id="t1", title="Report", notes="Q3", due="2026-03-15T00:00:00.000Z")

        text = format_tasks([task])

        assert text == (
            "Found 1 task(s):\n\n"
            "[ ] Report\n"
            "  Notes: Q3\n"
            "  Due: 2026-03-15\n"
            "  ID: t1\n\n"
        )

    def test_due_in_display_zone(self):
        """Due times are shown in the configured zone."""
        task = Task(id="t1", title="Call", due="2026-03-15T10:15:00Z")

        text = format_tasks([task], timezone(timedelta(hours=4)))

        assert "  Due: 2026-03-15 14:15\n" in text


class TestFormatSummaries:
    """Tests for single-task confirmations."""

    def test_created_without_due(self):
        """Should omit the due line when there is no due date."""
        text = format_created(Task(id="t1", title="Buy milk"))

        assert text == "Task created successfully!\nID: t1\nTitle: Buy milk"

    def test_created_with_due(self):
        """Should append the rendered due date."""
        text = format_created(Task(id="t1", title="Pay rent", due="2026-04-01T09:00:00Z"))

        assert text.endswith("\nDue: 2026-04-01 09:00")

    def test_updated(self):
        """Should confirm the update."""
        text = format_updated(Task(id="t2", title="Renamed"))

        assert text == "Task updated successfully!\nID: t2\nTitle: Renamed"

    def test_completed(self):
        """Should confirm completion."""
        text = format_completed(Task(id="t3", title="Ship it", status="completed"))

        assert text == "Task completed!\nID: t3\nTitle: Ship it"


class TestErrorResult:
    """Tests for domain error results."""

    def test_prefixes_and_flags(self):
        """Errors are flagged text results."""
        result = error_result(BackendError("HTTP 404: Not Found"))

        assert result.is_error is True
        assert result.to_dict() == {
            "content": [{"type": "text", "text": "Error: HTTP 404: Not Found"}],
            "isError": True,
        }
