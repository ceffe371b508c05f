"""CLI module for sonarr-client."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from sonarr_client.cli.exit_codes import ExitCode
from sonarr_client.cli.output import error_exit
from sonarr_client.client import SonarrClient
from sonarr_client.config import ConfigError, load_config, load_logging_config
from sonarr_client.errors import InvalidCredentialError, InvalidUrlError
from sonarr_client.logging import configure_logging

logger = logging.getLogger(__name__)


def _configure_logging(
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from CLI options.

    Args:
        config_path: Config file override.
        log_level: Override log level (debug, info, warning, error).
        log_file: Override log file path.
        log_json: Use JSON log format.
    """
    try:
        logging_config = load_logging_config(
            config_path,
            level=log_level,
            file=log_file,
            format="json" if log_json else None,
        )
    except ConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR)
    configure_logging(logging_config)


def get_client(ctx: click.Context) -> SonarrClient:
    """Build the SonarrClient for a subcommand from the group options.

    A client already stored in ctx.obj (e.g. by tests) is reused.
    """
    obj = ctx.ensure_object(dict)
    if obj.get("client") is not None:
        return obj["client"]

    try:
        config = load_config(
            obj.get("config_path"),
            url=obj.get("url"),
            api_key=obj.get("api_key"),
            timeout_seconds=obj.get("timeout"),
        )
        client = SonarrClient.from_config(config.connection)
    except (ConfigError, InvalidUrlError, InvalidCredentialError) as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR)

    ctx.call_on_close(client.close)
    obj["client"] = client
    logger.debug("Using Sonarr at %s", client.base_url)
    return client


@click.group()
@click.version_option(package_name="sonarr-client")
@click.option("--url", default=None, help="Sonarr base URL (env: SONARR_URL).")
@click.option(
    "--api-key",
    default=None,
    help="Sonarr API key (env: SONARR_API_KEY).",
)
@click.option(
    "--timeout",
    type=click.IntRange(1, 300),
    default=None,
    help="Request timeout in seconds (default: 30).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.config/sonarr-client/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    url: str | None,
    api_key: str | None,
    timeout: int | None,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """sonarr-client - Look up series and manage episodes in Sonarr."""
    ctx.ensure_object(dict)
    ctx.obj.update(
        url=url,
        api_key=api_key,
        timeout=timeout,
        config_path=config_path,
    )
    _configure_logging(config_path, log_level, log_file, log_json)


def _register_commands() -> None:
    from sonarr_client.cli.cleanup import delete_file_command, unmonitor_command
    from sonarr_client.cli.library import (
        episodes_command,
        series_command,
        tags_command,
    )

    main.add_command(series_command)
    main.add_command(tags_command)
    main.add_command(episodes_command)
    main.add_command(delete_file_command)
    main.add_command(unmonitor_command)


_register_commands()
