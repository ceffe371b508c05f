"""Unified CLI output formatting for JSON and human-readable output.

This module provides consistent error handling and output formatting
across all CLI commands.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, NoReturn

import click

from sonarr_client.cli.exit_codes import ExitCode
from sonarr_client.errors import (
    DecodeError,
    HttpStatusError,
    SonarrAuthError,
    TransportError,
)

format_option = click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Output format.",
)


def error_exit(
    message: str,
    code: ExitCode | int,
    json_output: bool = False,
) -> NoReturn:
    """Exit with formatted error message.

    Args:
        message: Error message to display.
        code: Exit code to use (ExitCode enum or int).
        json_output: Whether to format output as JSON.

    Note:
        This function never returns; it always calls sys.exit().
    """
    if isinstance(code, ExitCode):
        code_name = code.name
        exit_value = int(code)
    else:
        code_name = "UNKNOWN_ERROR"
        exit_value = code

    if json_output:
        click.echo(
            json.dumps(
                {
                    "status": "failed",
                    "error": {
                        "code": code_name,
                        "message": message,
                    },
                }
            ),
            err=True,
        )
    else:
        click.echo(f"Error: {message}", err=True)

    sys.exit(exit_value)


@contextmanager
def sonarr_errors(json_output: bool = False) -> Iterator[None]:
    """Translate client errors raised in the block into CLI exits."""
    try:
        yield
    except TransportError as e:
        error_exit(f"Cannot connect to Sonarr: {e}", ExitCode.CONNECTION_ERROR, json_output)
    except SonarrAuthError as e:
        error_exit(f"Sonarr rejected the API key: {e}", ExitCode.AUTH_ERROR, json_output)
    except HttpStatusError as e:
        error_exit(str(e), ExitCode.HTTP_ERROR, json_output)
    except DecodeError as e:
        error_exit(str(e), ExitCode.DECODE_ERROR, json_output)


def print_json(data: Any) -> None:
    """Print data as indented JSON."""
    click.echo(json.dumps(data, indent=2))


def success_output(message: str, json_output: bool = False, **data: Any) -> None:
    """Output a completed-operation message in the selected format."""
    if json_output:
        click.echo(json.dumps({"status": "completed", "message": message, **data}, indent=2))
    else:
        click.echo(message)
