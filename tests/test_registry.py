"""Tests for the tool catalog."""

from google_tasks_mcp.plugins.registry import TOOL_NAMES, TOOLS, get_tool


class TestToolCatalog:
    """Tests for the static tool list."""

    def test_lists_six_tools_in_order(self):
        """Tools are advertised in a fixed order."""
        assert TOOL_NAMES == (
            "list_task_lists",
            "list_tasks",
            "create_task",
            "update_task",
            "complete_task",
            "delete_task",
        )

    def test_every_schema_is_an_object(self):
        """Each input schema describes a JSON object."""
        for tool in TOOLS:
            assert tool.input_schema["type"] == "object"
            assert isinstance(tool.input_schema["properties"], dict)

    def test_required_fields(self):
        """Only title and task_id are ever required."""
        required = {tool.name: tool.input_schema.get("required", []) for tool in TOOLS}

        assert required == {
            "list_task_lists": [],
            "list_tasks": [],
            "create_task": ["title"],
            "update_task": ["task_id"],
            "complete_task": ["task_id"],
            "delete_task": ["task_id"],
        }

    def test_tasklist_defaults_to_default_list(self):
        """Every tasklist_id property defaults to @default."""
        for tool in TOOLS:
            prop = tool.input_schema["properties"].get("tasklist_id")
            if prop is not None:
                assert prop["default"] == "@default"

    def test_tasklist_properties_are_independent(self):
        """Schemas do not share a mutable tasklist_id dict."""
        list_tasks = get_tool("list_tasks").input_schema["properties"]["tasklist_id"]
        create_task = get_tool("create_task").input_schema["properties"]["tasklist_id"]

        assert list_tasks == create_task
        assert list_tasks is not create_task

    def test_discovery_hints_in_descriptions(self):
        """Descriptions point at the tools that supply valid IDs."""
        list_tasks = get_tool("list_tasks").input_schema["properties"]
        update_task = get_tool("update_task").input_schema["properties"]

        assert "list_task_lists" in list_tasks["tasklist_id"]["description"]
        assert "list_tasks" in update_task["task_id"]["description"]

    def test_to_dict_uses_mcp_field_names(self):
        """Definitions serialize with inputSchema."""
        data = get_tool("delete_task").to_dict()

        assert set(data) == {"name", "description", "inputSchema"}
        assert data["description"] == "Delete a task"

    def test_get_tool_unknown(self):
        """Unknown names return None."""
        assert get_tool("rename_task") is None
