"""Configuration dataclasses for sonarr-client."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


class ConfigError(ValueError):
    """Raised when configuration is missing or invalid."""

    pass


@dataclass(frozen=True)
class ConnectionConfig:
    """Configuration for connecting to a Sonarr instance."""

    url: str
    """Base URL of the service (e.g., "http://localhost:8989")."""

    api_key: str = field(repr=False)
    """API key for authentication (found in Settings > General > Security)."""

    timeout_seconds: int = 30
    """Request timeout in seconds (1-300)."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.url.startswith(("http://", "https://")):
            raise ConfigError("URL must start with http:// or https://")
        if not self.api_key or not self.api_key.strip():
            raise ConfigError("API key is required")
        if any(ch.isspace() for ch in self.api_key):
            raise ConfigError("API key must not contain whitespace")
        if not 1 <= self.timeout_seconds <= 300:
            raise ConfigError("Timeout must be between 1 and 300 seconds")


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ConfigError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ConfigError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class AppConfig:
    """Top-level configuration: connection plus logging."""

    connection: ConnectionConfig
    logging: LoggingConfig = field(default_factory=LoggingConfig)
