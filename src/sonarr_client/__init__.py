"""Typed client for the Sonarr v3 REST API."""

from sonarr_client.client import SonarrClient, auth_headers
from sonarr_client.errors import (
    DecodeError,
    HttpStatusError,
    InvalidCredentialError,
    InvalidUrlError,
    SonarrAuthError,
    SonarrError,
    TransportError,
)
from sonarr_client.models import EpisodeRecord, SeriesRecord, Tag

__version__ = "0.1.0"

__all__ = [
    "DecodeError",
    "EpisodeRecord",
    "HttpStatusError",
    "InvalidCredentialError",
    "InvalidUrlError",
    "SeriesRecord",
    "SonarrAuthError",
    "SonarrClient",
    "SonarrError",
    "Tag",
    "TransportError",
    "auth_headers",
]
