"""MCP server exposing Google Tasks to LLM clients over stdio."""

SERVER_NAME = "google-tasks"
SERVER_VERSION = "1.0.0"

__version__ = SERVER_VERSION
