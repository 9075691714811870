"""Server configuration.

Configuration comes either from environment variables or from a YAML
file, is read once at startup, and is passed to the components that need
it. Nothing reads the environment after startup.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from google_tasks_mcp.exceptions import ConfigError

ENV_CREDENTIALS = "GOOGLE_OAUTH_CREDENTIALS"
ENV_TOKEN_FILE = "GOOGLE_TOKEN_FILE"
ENV_TIMEZONE = "TIMEZONE"
ENV_AUDIT_LOG = "GOOGLE_TASKS_AUDIT_LOG"

DEFAULT_TIMEZONE = "UTC"
DEFAULT_TOKEN_FILENAME = "tasks-token.json"


def expand_env_vars(value: str) -> str:
    """Expand environment variables in a string.

    Supports ${VAR_NAME} syntax. Unknown variables are left unchanged.

    Args:
        value: String potentially containing environment variable references.

    Returns:
        String with known environment variables expanded.
    """
    pattern = re.compile(r"\$\{([^}]+)\}")

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value
        if var_name == "HOME":
            return os.path.expanduser("~")
        return match.group(0)

    return pattern.sub(replacer, value)


def load_zone(name: str) -> tzinfo:
    """Resolve an IANA zone name.

    Raises:
        ConfigError: If the zone is unknown.
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"Invalid TIMEZONE {name!r}: {e}") from e


def default_token_file(credentials_file: Path) -> Path:
    """Token file location used when none is configured."""
    return credentials_file.parent / DEFAULT_TOKEN_FILENAME


@dataclass(frozen=True)
class ServerConfig:
    """Immutable process configuration."""

    credentials_file: Path
    token_file: Path
    timezone: str = DEFAULT_TIMEZONE
    audit_log_file: Path | None = None

    @property
    def zone(self) -> tzinfo:
        """Display zone for due dates."""
        return load_zone(self.timezone)

    @classmethod
    def create(
        cls,
        credentials_file: str,
        token_file: str = "",
        timezone: str = "",
        audit_log_file: str = "",
    ) -> ServerConfig:
        """Build a validated config from raw string settings.

        Raises:
            ConfigError: If the timezone is unknown.
        """
        credentials = Path(credentials_file)
        config = cls(
            credentials_file=credentials,
            token_file=Path(token_file) if token_file else default_token_file(credentials),
            timezone=timezone or DEFAULT_TIMEZONE,
            audit_log_file=Path(audit_log_file) if audit_log_file else None,
        )
        # Fail at startup rather than on the first request
        load_zone(config.timezone)
        return config

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerConfig:
        """Create a config from environment variables.

        Raises:
            ConfigError: If the credentials path is unset or the zone is unknown.
        """
        env = os.environ if environ is None else environ

        credentials = env.get(ENV_CREDENTIALS, "")
        if not credentials:
            raise ConfigError(f"{ENV_CREDENTIALS} environment variable must be set")

        return cls.create(
            credentials_file=credentials,
            token_file=env.get(ENV_TOKEN_FILE, ""),
            timezone=env.get(ENV_TIMEZONE, ""),
            audit_log_file=env.get(ENV_AUDIT_LOG, ""),
        )

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> ServerConfig:
        """Create a config from a parsed YAML mapping.

        Path values may reference environment variables as ``${VAR}``.

        Raises:
            ConfigError: If the credentials path is unset or the zone is unknown.
        """
        google = config.get("google") or {}
        audit = config.get("audit") or {}

        credentials = expand_env_vars(str(google.get("credentials_file") or ""))
        if not credentials:
            raise ConfigError("google.credentials_file must be set")

        return cls.create(
            credentials_file=credentials,
            token_file=expand_env_vars(str(google.get("token_file") or "")),
            timezone=str(config.get("timezone") or ""),
            audit_log_file=expand_env_vars(str(audit.get("log_file") or "")),
        )


def load_config(path: Path) -> ServerConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        ServerConfig instance.

    Raises:
        ConfigError: If the file cannot be found, parsed, or validated.
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path) as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config YAML: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError("Config must be a YAML mapping")

    return ServerConfig.from_dict(config)
