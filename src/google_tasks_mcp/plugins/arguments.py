"""Decoding of tool arguments into typed inputs.

Arguments are type-checked against the tool's JSON Schema, then defaults
are applied, then required fields are checked. Every failure raises
``JsonRpcError`` with ``INVALID_PARAMS`` so the client sees a protocol
error rather than a tool result.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from jsonschema import Draft202012Validator

from google_tasks_mcp.backend.base import DEFAULT_TASKLIST_ID, UNSET, TaskUpdates
from google_tasks_mcp.protocol.jsonrpc import INVALID_PARAMS, JsonRpcError

TITLE_REQUIRED = "title is required"
TASK_ID_REQUIRED = "task_id is required (use list_tasks to find task IDs)"


@dataclass(frozen=True)
class ListTasksInput:
    tasklist_id: str = DEFAULT_TASKLIST_ID
    show_completed: bool = False


@dataclass(frozen=True)
class CreateTaskInput:
    title: str
    tasklist_id: str = DEFAULT_TASKLIST_ID
    notes: str = ""
    due: str = ""


@dataclass(frozen=True)
class UpdateTaskInput:
    task_id: str
    tasklist_id: str = DEFAULT_TASKLIST_ID
    updates: TaskUpdates = field(default_factory=TaskUpdates)


@dataclass(frozen=True)
class TaskRefInput:
    """Identifies a single task (complete_task, delete_task)."""

    task_id: str
    tasklist_id: str = DEFAULT_TASKLIST_ID


def _invalid(detail: str) -> JsonRpcError:
    return JsonRpcError(INVALID_PARAMS, "Invalid arguments", detail)


def load_arguments(arguments: Any, schema: dict[str, Any]) -> dict[str, Any]:
    """Turn raw ``arguments`` into a type-checked dict.

    Accepts an object, a JSON-encoded object, or nothing. Null members
    count as absent. The schema's ``required`` keyword is skipped here
    because required fields are checked after defaults are applied.

    Args:
        arguments: Raw ``arguments`` member of a tools/call request.
        schema: The tool's input schema.

    Returns:
        Argument dict with null members removed.

    Raises:
        JsonRpcError: If the arguments are malformed or mistyped.
    """
    if arguments is None:
        arguments = {}
    elif isinstance(arguments, str):
        try:
            arguments = json.loads(arguments) if arguments.strip() else {}
        except json.JSONDecodeError as e:
            raise _invalid(str(e)) from e

    if not isinstance(arguments, dict):
        raise _invalid("arguments must be a JSON object")

    present = {key: value for key, value in arguments.items() if value is not None}

    validator = Draft202012Validator(schema)
    errors = [e for e in validator.iter_errors(present) if e.validator != "required"]
    if errors:
        error = errors[0]
        path = ".".join(str(p) for p in error.path) if error.path else "root"
        raise _invalid(f"'{path}': {error.message}")

    return present


def _tasklist_id(args: dict[str, Any]) -> str:
    return args.get("tasklist_id") or DEFAULT_TASKLIST_ID


def _require_task_id(args: dict[str, Any]) -> str:
    task_id = args.get("task_id", "")
    if not task_id:
        raise JsonRpcError(INVALID_PARAMS, TASK_ID_REQUIRED)
    return task_id


def decode_list_tasks(args: dict[str, Any]) -> ListTasksInput:
    return ListTasksInput(
        tasklist_id=_tasklist_id(args),
        show_completed=args.get("show_completed", False),
    )


def decode_create_task(args: dict[str, Any]) -> CreateTaskInput:
    title = args.get("title", "")
    if not title:
        raise JsonRpcError(INVALID_PARAMS, TITLE_REQUIRED)

    return CreateTaskInput(
        title=title,
        tasklist_id=_tasklist_id(args),
        notes=args.get("notes", ""),
        due=args.get("due", ""),
    )


def decode_update_task(args: dict[str, Any]) -> UpdateTaskInput:
    """Decode update_task arguments.

    A field that is absent stays ``UNSET``; an empty string is kept as a
    request to clear the field.
    """
    task_id = _require_task_id(args)
    updates = TaskUpdates(
        title=args.get("title", UNSET),
        notes=args.get("notes", UNSET),
        due=args.get("due", UNSET),
    )
    return UpdateTaskInput(task_id=task_id, tasklist_id=_tasklist_id(args), updates=updates)


def decode_task_ref(args: dict[str, Any]) -> TaskRefInput:
    return TaskRefInput(task_id=_require_task_id(args), tasklist_id=_tasklist_id(args))
