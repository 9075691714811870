"""MCP initialize handshake.

The server pins a single protocol version and keeps no session state:
tools are callable whether or not the client completed the handshake.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from google_tasks_mcp import SERVER_NAME, SERVER_VERSION

MCP_PROTOCOL_VERSION = "2024-11-05"

# Handshake acknowledgements; never answered, even when sent with an id
INITIALIZED_METHODS = frozenset({"initialized", "notifications/initialized"})


@dataclass(frozen=True)
class LifecycleManager:
    """Answers the initialize request with the server's identity."""

    server_info: dict[str, str] = field(
        default_factory=lambda: {"name": SERVER_NAME, "version": SERVER_VERSION}
    )
    capabilities: dict[str, Any] = field(default_factory=lambda: {"tools": {}})

    def handle_initialize(self, params: Any = None) -> dict[str, Any]:
        """Handle initialize request.

        The client's requested protocol version is not negotiated; the
        pinned version is always advertised.

        Args:
            params: Initialize request parameters (unused).

        Returns:
            Initialize response result.
        """
        return {
            "protocolVersion": MCP_PROTOCOL_VERSION,
            "serverInfo": dict(self.server_info),
            "capabilities": self.capabilities,
        }
