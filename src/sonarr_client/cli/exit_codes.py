"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (config, input)
    30-39: Connection errors
    40-49: Service errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for sonarr-client CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    ABORTED = 2

    # Validation errors (10-19)
    CONFIG_ERROR = 11

    # Connection errors (30-39)
    CONNECTION_ERROR = 30

    # Service errors (40-49)
    HTTP_ERROR = 40
    AUTH_ERROR = 41
    DECODE_ERROR = 42
