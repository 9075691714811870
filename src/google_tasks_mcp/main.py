"""Google Tasks MCP Server - Main entry point.

Usage::

    google-tasks-mcp              serve MCP over stdio
    google-tasks-mcp --auth       print the consent URL (AUTH_URL:<url>)
    google-tasks-mcp --token CODE exchange a consent code and save the token

Configuration comes from the environment (GOOGLE_OAUTH_CREDENTIALS,
GOOGLE_TOKEN_FILE, TIMEZONE, GOOGLE_TASKS_AUDIT_LOG) unless ``--config``
names a YAML file.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from google_tasks_mcp import SERVER_NAME, __version__
from google_tasks_mcp.audit import AuditLogger
from google_tasks_mcp.backend.auth import (
    BearerAuth,
    CredentialStore,
    authorization_url,
    exchange_code,
)
from google_tasks_mcp.backend.google import GoogleTasksBackend
from google_tasks_mcp.config import ServerConfig, load_config
from google_tasks_mcp.exceptions import AuthError, ConfigError
from google_tasks_mcp.protocol.transport import StdioTransport
from google_tasks_mcp.server import MCPServer


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="google-tasks-mcp",
        description="Google Tasks MCP server (stdio)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to a YAML config file (default: read the environment)",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--auth",
        action="store_true",
        help="Print the OAuth consent URL and exit",
    )
    mode.add_argument(
        "--token",
        metavar="CODE",
        default=None,
        help="Exchange an authorization code for a token and exit",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"google-tasks-mcp {__version__}",
    )
    return parser


def serve(server: MCPServer, transport: StdioTransport) -> int:
    """Run the message loop until EOF.

    Args:
        server: Dispatcher for incoming messages.
        transport: Line-oriented stdio transport.

    Returns:
        Exit code (0 on EOF, 130 on interrupt).
    """
    try:
        while True:
            message = transport.read_message()
            if message is None:
                transport.log("EOF received, shutting down")
                break

            response = server.handle_message(message)
            if response is not None:
                transport.write_message(response)

    except KeyboardInterrupt:
        transport.log("Interrupted, shutting down")
        return 130  # Standard exit code for SIGINT

    return 0


def _load_config(path: Path | None) -> ServerConfig:
    if path is not None:
        return load_config(path)
    return ServerConfig.from_env()


def run_auth(config: ServerConfig) -> int:
    """Print the consent URL in the ``AUTH_URL:<url>`` form."""
    url = authorization_url(config.credentials_file)
    print(f"AUTH_URL:{url}")
    return 0


def run_token(config: ServerConfig, code: str) -> int:
    """Exchange ``code`` for a token and save it to the token file."""
    exchange_code(config.credentials_file, config.token_file, code)
    print(f"Token saved to: {config.token_file}")
    return 0


def run_server(config: ServerConfig, transport: StdioTransport | None = None) -> int:
    """Load credentials and serve MCP over stdio.

    Raises:
        AuthError: If the token is missing or cannot be refreshed.
    """
    store = CredentialStore.load(config.token_file)
    backend = GoogleTasksBackend(auth=BearerAuth(store), zone=config.zone)

    audit_logger = None
    if config.audit_log_file is not None:
        audit_logger = AuditLogger(config.audit_log_file)

    transport = transport or StdioTransport()

    with MCPServer(backend, zone=config.zone, audit_logger=audit_logger) as server:
        transport.log(f"{SERVER_NAME} MCP server {__version__} started")
        transport.log(f"Token loaded from: {config.token_file}")
        transport.log(f"Display timezone: {config.timezone}")
        if audit_logger is not None:
            transport.log(f"Audit log: {config.audit_log_file}")
        return serve(server, transport)


def main(argv: list[str] | None = None) -> int:
    """Run the command line interface.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = build_parser().parse_args(argv)

    try:
        config = _load_config(args.config)
        if args.auth:
            return run_auth(config)
        if args.token is not None:
            return run_token(config, args.token)
        return run_server(config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except AuthError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
