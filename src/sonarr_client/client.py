"""Sonarr API client.

This module provides a synchronous HTTP client for the Sonarr v3 API:
series lookup by TVDB id, tag and episode listing, episode file deletion and
episode (un)monitoring.

Sonarr has no partial-update endpoint for episodes, so changing the monitored
flag is a read-modify-write: GET the full episode, change one field, PUT the
full episode back. Nothing guards the window between the two requests. A
change made by anyone else to the same episode in that window is overwritten
by the PUT.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from sonarr_client.errors import (
    DecodeError,
    HttpStatusError,
    InvalidCredentialError,
    InvalidUrlError,
    SonarrAuthError,
    TransportError,
)
from sonarr_client.logging.redaction import register_secret, unregister_secret
from sonarr_client.models import EpisodeRecord, SeriesRecord, Tag, decode_list

if TYPE_CHECKING:
    from sonarr_client.config.models import ConnectionConfig

logger = logging.getLogger(__name__)

API_ROOT = "/api/v3/"
API_KEY_HEADER = "X-Api-Key"
DEFAULT_TIMEOUT_SECONDS = 30
# Secrets are masked by substring; shorter keys would mangle unrelated text.
# Sonarr generates 32-character keys.
MIN_API_KEY_LENGTH = 8


def _is_header_value_char(ch: str) -> bool:
    return ch == "\t" or " " <= ch <= "~"


def auth_headers(api_key: str) -> httpx.Headers:
    """Build the default request headers carrying the API key.

    The key is registered as a secret here, so it is masked in every log
    record and error message from then on.

    httpx only hides Authorization headers in repr(), so the returned
    headers (and the headers of any httpx.Request built from them) show the
    key when printed directly. Text that goes through the package's logging
    handlers or SonarrError messages is masked.

    Args:
        api_key: Sonarr API key.

    Returns:
        Headers with a single X-Api-Key entry.

    Raises:
        InvalidCredentialError: If the key is not a legal header value or is
            shorter than MIN_API_KEY_LENGTH.
    """
    if not all(_is_header_value_char(ch) for ch in api_key):
        raise InvalidCredentialError(
            "API key contains characters that are not allowed in an HTTP header"
        )
    if len(api_key) < MIN_API_KEY_LENGTH:
        raise InvalidCredentialError(
            f"API key must be at least {MIN_API_KEY_LENGTH} characters long"
        )
    register_secret(api_key)
    return httpx.Headers({API_KEY_HEADER: api_key})


def api_root_url(base_url: str) -> httpx.URL:
    """Parse a base URL and replace its path with the API root.

    Args:
        base_url: Sonarr URL, e.g. "http://localhost:8989" or
            "https://example.com/sonarr/".

    Returns:
        URL ending in /api/v3/ with no query or fragment.

    Raises:
        InvalidUrlError: If the URL cannot be parsed, is not http(s), or has
            no host.
    """
    try:
        url = httpx.URL(base_url)
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidUrlError(f"Invalid base URL {base_url!r}: {e}") from e
    if url.scheme not in ("http", "https"):
        raise InvalidUrlError(
            f"Invalid base URL {base_url!r}: scheme must be http or https"
        )
    if not url.host:
        raise InvalidUrlError(f"Invalid base URL {base_url!r}: missing host")
    return url.copy_with(path=API_ROOT, query=None, fragment=None)


def _resource_path(collection: str, identifier: int) -> str:
    """Build "collection/{id}" with the id escaped as a single path segment."""
    if isinstance(identifier, bool) or not isinstance(identifier, int):
        raise TypeError(f"{collection} id must be an int, got {identifier!r}")
    if identifier < 0:
        raise ValueError(f"{collection} id must be non-negative, got {identifier}")
    return f"{collection}/{quote(str(identifier), safe='')}"


class SonarrClient:
    """HTTP client for Sonarr v3 API.

    The handle is immutable and safe to share between threads; each call
    runs its own request on the shared connection pool. Calls block until
    the exchange completes or the transport times out.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        No network I/O happens here.

        Args:
            base_url: Sonarr URL. Its path is replaced by /api/v3/.
            api_key: Sonarr API key, sent as X-Api-Key on every request.
            timeout_seconds: Transport timeout for each request.
            transport: Optional httpx transport (e.g. for tests).

        Raises:
            InvalidUrlError: If base_url is malformed.
            InvalidCredentialError: If api_key is not a legal header value.
        """
        self._base_url = api_root_url(base_url)
        headers = auth_headers(api_key)
        self._api_key = api_key
        self._closed = False
        self._client = httpx.Client(
            base_url=self._base_url,
            headers=headers,
            timeout=timeout_seconds,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: ConnectionConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> SonarrClient:
        """Create a client from connection configuration."""
        return cls(
            config.url,
            config.api_key,
            timeout_seconds=config.timeout_seconds,
            transport=transport,
        )

    @property
    def base_url(self) -> httpx.URL:
        """API root URL all resource paths are joined against."""
        return self._base_url

    def __repr__(self) -> str:
        return f"SonarrClient(base_url={str(self._base_url)!r})"

    def close(self) -> None:
        """Close the HTTP client and release the key's redaction registration.

        The key stays masked while any other open client uses it.
        """
        if self._closed:
            return
        self._closed = True
        self._client.close()
        unregister_secret(self._api_key)

    def __enter__(self) -> SonarrClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _request(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Send one request and raise on transport failure or non-2xx status.

        Args:
            method: HTTP method.
            endpoint: Path relative to the API root, e.g. "episode/12".
            params: Query parameters, encoded by httpx.
            json: JSON request body.

        Returns:
            The successful response.

        Raises:
            TransportError: If no usable response was received.
            DecodeError: If the body could not be decoded (bad Content-Encoding).
            SonarrAuthError: If Sonarr answered 401 or 403.
            HttpStatusError: If Sonarr answered with any other non-2xx status.
        """
        logger.debug(
            "Sonarr request %s %s",
            method,
            endpoint,
            extra={"method": method, "endpoint": endpoint, "params": params},
        )
        try:
            response = self._client.request(method, endpoint, params=params, json=json)
        except httpx.DecodingError as e:
            raise DecodeError(endpoint, f"undecodable response body: {e}") from e
        except httpx.RequestError as e:
            raise TransportError(method, endpoint, str(e) or type(e).__name__) from e

        logger.debug(
            "Sonarr response %s %s: HTTP %d",
            method,
            endpoint,
            response.status_code,
        )
        if not response.is_success:
            error_cls = (
                SonarrAuthError
                if response.status_code in (401, 403)
                else HttpStatusError
            )
            raise error_cls(
                response.status_code, method, endpoint, response.text or None
            )
        return response

    @staticmethod
    def _decode_json(response: httpx.Response, endpoint: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(endpoint, f"invalid JSON: {e}") from e

    def _get_json(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        response = self._request("GET", endpoint, params=params)
        return self._decode_json(response, endpoint)

    def series_by_tvdb_id(self, tvdb_id: str | int) -> list[SeriesRecord]:
        """Look up series by TVDB id.

        Sonarr filters server-side. The result may be empty, or hold more than
        one series when the local library has duplicates.

        Args:
            tvdb_id: TVDB identifier, e.g. "81189".

        Returns:
            Matching series in the order Sonarr returned them.

        Raises:
            TransportError, HttpStatusError, DecodeError.
        """
        payload = self._get_json("series", params={"tvdbId": str(tvdb_id)})
        return decode_list("series", payload, SeriesRecord.from_wire)

    def tags(self) -> list[Tag]:
        """Get all tags."""
        return decode_list("tag", self._get_json("tag"), Tag.from_wire)

    def episodes_by_series(self, series_id: int) -> list[EpisodeRecord]:
        """Get all episodes of a series.

        An unknown series id is not checked locally; Sonarr's answer (empty
        list or error) is returned or raised as is.

        Args:
            series_id: Sonarr series id.

        Returns:
            Episodes in the order Sonarr returned them.
        """
        if isinstance(series_id, bool) or not isinstance(series_id, int):
            raise TypeError(f"series id must be an int, got {series_id!r}")
        payload = self._get_json("episode", params={"seriesId": str(series_id)})
        return decode_list("episode", payload, EpisodeRecord.from_wire)

    def delete_episode_file(self, episode_file_id: int) -> None:
        """Delete an episode file by its id.

        Sonarr removes the media file from disk. A second call for the same
        id fails with HttpStatusError (usually 404). The response body is
        not read.

        Args:
            episode_file_id: Sonarr episode file id.
        """
        endpoint = _resource_path("episodefile", episode_file_id)
        self._request("DELETE", endpoint)
        logger.info("Deleted episode file %d", episode_file_id)

    def get_episode(self, episode_id: int) -> EpisodeRecord:
        """Get a single episode, keeping every wire field for write-back."""
        endpoint = _resource_path("episode", episode_id)
        return EpisodeRecord.from_wire(self._get_json(endpoint), endpoint)

    def update_episode(self, episode: EpisodeRecord) -> None:
        """Replace an episode resource with the given record.

        The whole record is sent; Sonarr has no partial update.
        """
        endpoint = _resource_path("episode", episode.id)
        self._request("PUT", endpoint, json=episode.to_wire())

    def set_episode_monitored(self, episode_id: int, monitored: bool) -> None:
        """Set the monitored flag of an episode (read-modify-write).

        1. GET the episode. On failure nothing is written.
        2. Change only the monitored flag.
        3. PUT the full episode back. On failure Sonarr keeps the state it
           had before step 1, so there is nothing to roll back.

        Not atomic: there is no version check between steps 1 and 3.

        Args:
            episode_id: Sonarr episode id.
            monitored: New monitored flag.
        """
        episode = self.get_episode(episode_id)
        self.update_episode(episode.with_monitored(monitored))
        logger.info(
            "Set episode %d (S%02dE%02d) monitored=%s",
            episode.id,
            episode.season_number,
            episode.episode_number,
            monitored,
        )

    def unmonitor_episode(self, episode_id: int) -> None:
        """Unmonitor an episode so Sonarr does not download it again."""
        self.set_episode_monitored(episode_id, False)
