"""Configuration management for sonarr-client.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (SONARR_*)
3. Config file (~/.config/sonarr-client/config.toml)
4. Default values (lowest priority)
"""

from sonarr_client.config.env import EnvReader
from sonarr_client.config.loader import (
    get_default_config_path,
    load_config,
    load_config_file,
    load_logging_config,
)
from sonarr_client.config.models import (
    AppConfig,
    ConfigError,
    ConnectionConfig,
    LoggingConfig,
)

__all__ = [
    # Models
    "AppConfig",
    "ConfigError",
    "ConnectionConfig",
    "LoggingConfig",
    # Loader
    "EnvReader",
    "get_default_config_path",
    "load_config",
    "load_config_file",
    "load_logging_config",
]
