"""Google Tasks REST API backend.

Talks to ``tasks/v1`` over httpx. Every failure, whether HTTP status,
transport, or credential, surfaces as ``BackendError``.
"""

from __future__ import annotations

from datetime import UTC, datetime, tzinfo
from typing import Any
from urllib.parse import quote

import httpx

from google_tasks_mcp import SERVER_VERSION
from google_tasks_mcp.backend.base import (
    STATUS_COMPLETED,
    UNSET,
    Task,
    TaskList,
    TasksBackend,
    TaskUpdates,
)
from google_tasks_mcp.due import encode_due, format_rfc3339
from google_tasks_mcp.exceptions import AuthError, BackendError

API_BASE_URL = "https://tasks.googleapis.com/tasks/v1"

USER_AGENT = f"google-tasks-mcp/{SERVER_VERSION}"

MAX_RESULTS = 100


def _segment(value: str) -> str:
    """Quote a path segment (``@default`` stays as is)."""
    return quote(value, safe="@")


def _error_message(response: httpx.Response) -> str:
    """Extract the API's error message from an error response."""
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase

    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str):
        return payload.get("error_description") or error
    return response.reason_phrase


class GoogleTasksBackend(TasksBackend):
    """Tasks backend backed by the Google Tasks API."""

    def __init__(
        self,
        auth: httpx.Auth | None = None,
        zone: tzinfo | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the backend.

        Args:
            auth: Supplies the bearer credential for each request.
            zone: Zone user-format due dates are interpreted in.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (tests inject a mock).
        """
        self._zone = zone
        self._client = httpx.Client(
            base_url=API_BASE_URL,
            auth=auth,
            headers={"User-Agent": USER_AGENT},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a request and return the decoded JSON body.

        Raises:
            BackendError: On any failure.
        """
        try:
            response = self._client.request(method, path, params=params, json=body)
        except httpx.HTTPError as e:
            raise BackendError(f"request failed: {e}") from e
        except AuthError as e:
            raise BackendError(str(e)) from e

        if response.is_error:
            raise BackendError(
                f"HTTP {response.status_code}: {_error_message(response)}",
                status_code=response.status_code,
            )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise BackendError(f"invalid response from API: {e}") from e

    def _task_path(self, tasklist_id: str, task_id: str | None = None) -> str:
        path = f"/lists/{_segment(tasklist_id)}/tasks"
        if task_id is not None:
            path += f"/{_segment(task_id)}"
        return path

    def list_task_lists(self) -> list[TaskList]:
        """Return all task lists."""
        data = self._request("GET", "/users/@me/lists")
        return [TaskList.from_dict(item) for item in data.get("items", [])]

    def list_tasks(self, tasklist_id: str, show_completed: bool) -> list[Task]:
        """Return up to 100 visible tasks in a list."""
        params = {
            "maxResults": MAX_RESULTS,
            "showCompleted": "true" if show_completed else "false",
            "showHidden": "false",
        }
        data = self._request("GET", self._task_path(tasklist_id), params=params)
        return [Task.from_dict(item) for item in data.get("items", [])]

    def create_task(self, tasklist_id: str, title: str, notes: str = "", due: str = "") -> Task:
        """Insert a task.

        Raises:
            InvalidDueFormatError: If ``due`` is malformed; nothing is sent.
            BackendError: If the API call fails.
        """
        body: dict[str, Any] = {"title": title}
        if notes:
            body["notes"] = notes
        if due:
            body["due"] = encode_due(due, self._zone)

        data = self._request("POST", self._task_path(tasklist_id), body=body)
        return Task.from_dict(data)

    def update_task(self, tasklist_id: str, task_id: str, updates: TaskUpdates) -> Task:
        """Read-modify-write a task.

        Cleared fields are dropped from the resource so the PUT removes
        them.
        """
        path = self._task_path(tasklist_id, task_id)
        resource = self._request("GET", path)

        if updates.title is not UNSET:
            resource["title"] = updates.title
        if updates.notes is not UNSET:
            self._set_or_clear(resource, "notes", updates.notes)
        if updates.due is not UNSET:
            encoded = encode_due(updates.due, self._zone) if updates.due else ""
            self._set_or_clear(resource, "due", encoded)
        if updates.status is not UNSET:
            resource["status"] = updates.status
            if updates.status == STATUS_COMPLETED:
                resource["completed"] = format_rfc3339(datetime.now(UTC).replace(microsecond=0))
            else:
                resource.pop("completed", None)

        data = self._request("PUT", path, body=resource)
        return Task.from_dict(data)

    @staticmethod
    def _set_or_clear(resource: dict[str, Any], key: str, value: str) -> None:
        if value:
            resource[key] = value
        else:
            resource.pop(key, None)

    def delete_task(self, tasklist_id: str, task_id: str) -> None:
        """Delete a task."""
        self._request("DELETE", self._task_path(tasklist_id, task_id))
