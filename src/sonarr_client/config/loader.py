"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (SONARR_*)
3. Config file (~/.config/sonarr-client/config.toml)
4. Default values

Environment variables:
- SONARR_URL: Base URL of the Sonarr instance
- SONARR_API_KEY: Sonarr API key
- SONARR_TIMEOUT: Request timeout in seconds (default 30)
- SONARR_CONFIG_PATH: Path to config file (overrides default location)
- SONARR_LOG_LEVEL: debug, info, warning or error
- SONARR_LOG_FORMAT: text or json
- SONARR_LOG_FILE: Path to log file

Config file layout:

    [sonarr]
    url = "http://localhost:8989"
    api_key = "..."
    timeout_seconds = 30

    [logging]
    level = "info"
    format = "text"
    file = "~/.local/state/sonarr-client/client.log"
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from sonarr_client.config.env import EnvReader
from sonarr_client.config.models import (
    AppConfig,
    ConfigError,
    ConnectionConfig,
    LoggingConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path.home() / ".config" / "sonarr-client" / "config.toml"


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Get the config file path.

    Can be overridden by SONARR_CONFIG_PATH environment variable.
    """
    reader = env_reader or EnvReader()
    return reader.get_path("SONARR_CONFIG_PATH", DEFAULT_CONFIG_FILE)


def load_config_file(path: Path) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file.

    Returns:
        Parsed configuration dict. Empty dict if the file doesn't exist.

    Raises:
        ConfigError: If the file exists but is not valid TOML.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        logger.debug("No config file at %s", path)
        return {}
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e


def _section(file_config: dict[str, Any], name: str) -> dict[str, Any]:
    section = file_config.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section


def _first(*values: Any) -> Any:
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def load_logging_config(
    config_path: Path | None = None,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    env_reader: EnvReader | None = None,
) -> LoggingConfig:
    """Build LoggingConfig from CLI overrides, environment and config file.

    Args:
        config_path: Path to config file (overrides SONARR_CONFIG_PATH).
        level: CLI override for log level.
        file: CLI override for log file.
        format: CLI override for log format (text, json).
        env_reader: Optional EnvReader for testing (uses os.environ if None).

    Returns:
        Validated LoggingConfig.
    """
    reader = env_reader or EnvReader()
    path = config_path or get_default_config_path(reader)
    section = _section(load_config_file(path), "logging")

    file_value = section.get("file")
    file_path = Path(file_value).expanduser() if file_value else None

    defaults = LoggingConfig()
    return LoggingConfig(
        level=_first(
            level, reader.get_str("SONARR_LOG_LEVEL"), section.get("level"), defaults.level
        ),
        file=_first(file, reader.get_path("SONARR_LOG_FILE"), file_path),
        format=_first(
            format,
            reader.get_str("SONARR_LOG_FORMAT"),
            section.get("format"),
            defaults.format,
        ),
        include_stderr=bool(section.get("include_stderr", defaults.include_stderr)),
        max_bytes=section.get("max_bytes", defaults.max_bytes),
        backup_count=section.get("backup_count", defaults.backup_count),
    )


def load_config(
    config_path: Path | None = None,
    *,
    url: str | None = None,
    api_key: str | None = None,
    timeout_seconds: int | None = None,
    env_reader: EnvReader | None = None,
) -> AppConfig:
    """Get configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides SONARR_CONFIG_PATH).
        url: CLI override for the Sonarr base URL.
        api_key: CLI override for the API key.
        timeout_seconds: CLI override for the request timeout.
        env_reader: Optional EnvReader for testing (uses os.environ if None).

    Returns:
        AppConfig with merged configuration.

    Raises:
        ConfigError: If URL or API key is missing, or a value is invalid.
    """
    reader = env_reader or EnvReader()
    path = config_path or get_default_config_path(reader)
    section = _section(load_config_file(path), "sonarr")

    resolved_url = _first(url, reader.get_str("SONARR_URL"), section.get("url"))
    resolved_key = _first(
        api_key, reader.get_str("SONARR_API_KEY"), section.get("api_key")
    )
    resolved_timeout = _first(
        timeout_seconds,
        reader.get_int("SONARR_TIMEOUT"),
        section.get("timeout_seconds"),
        30,
    )

    if not resolved_url:
        raise ConfigError(
            "Sonarr URL is not set (use --url, SONARR_URL or [sonarr] url)"
        )
    if not resolved_key:
        raise ConfigError(
            "Sonarr API key is not set (use --api-key, SONARR_API_KEY "
            "or [sonarr] api_key)"
        )

    connection = ConnectionConfig(
        url=str(resolved_url),
        api_key=str(resolved_key),
        timeout_seconds=int(resolved_timeout),
    )
    return AppConfig(
        connection=connection,
        logging=load_logging_config(path, env_reader=reader),
    )
