"""Plugin base class and data structures.

Defines the interface a tool provider implements.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ToolDefinition:
    """Definition of a tool provided by a plugin."""

    name: str
    description: str
    input_schema: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Convert to MCP tool format.

        Returns:
            Dictionary in MCP tools/list format.
        """
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


@dataclass
class ToolResult:
    """Result of a tool execution."""

    content: list[dict[str, Any]]
    is_error: bool = False

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> ToolResult:
        """Build a result holding a single text block."""
        return cls(content=[{"type": "text", "text": text}], is_error=is_error)

    def to_dict(self) -> dict[str, Any]:
        """Convert to MCP result format.

        ``isError`` is only emitted when set.

        Returns:
            Dictionary in MCP tools/call result format.
        """
        result: dict[str, Any] = {"content": self.content}
        if self.is_error:
            result["isError"] = True
        return result


class PluginBase(ABC):
    """Abstract base class for tool providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the plugin identifier."""
        pass

    @property
    @abstractmethod
    def version(self) -> str:
        """Return the plugin version."""
        pass

    @abstractmethod
    def get_tools(self) -> list[ToolDefinition]:
        """Return tool definitions provided by this plugin, in display order."""
        pass

    @abstractmethod
    def execute(self, tool_name: str, arguments: Any) -> ToolResult:
        """Execute a tool.

        Args:
            tool_name: Name of the tool to execute.
            arguments: Raw tool arguments as received from the client.

        Returns:
            ToolResult with content and error status.

        Raises:
            JsonRpcError: If the arguments are invalid.
        """
        pass

    def cleanup(self) -> None:
        """Release plugin resources."""
