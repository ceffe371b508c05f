"""Exceptions raised by the Sonarr client.

Construction errors (InvalidUrlError, InvalidCredentialError) mean the
configuration must be fixed. TransportError is a network failure the caller
may retry. HttpStatusError covers every non-2xx response, distinguished by
status_code. DecodeError means the service broke its response contract.

Every message is passed through redact(), so a registered API key never
appears in exception text.
"""

from __future__ import annotations

from sonarr_client.logging.redaction import redact

# Maximum characters of a service error body kept on HttpStatusError
BODY_SNIPPET_LENGTH = 400


class SonarrError(Exception):
    """Base class for all sonarr-client errors."""

    def __init__(self, message: str) -> None:
        super().__init__(redact(message))


class InvalidUrlError(SonarrError, ValueError):
    """Raised when the base URL cannot be parsed or is not http(s)."""

    pass


class InvalidCredentialError(SonarrError, ValueError):
    """Raised when the API key is not a legal HTTP header value."""

    pass


class TransportError(SonarrError):
    """Raised when a request fails before a response is received."""

    def __init__(self, method: str, endpoint: str, cause: str) -> None:
        self.method = method
        self.endpoint = endpoint
        super().__init__(f"{method} {endpoint} failed: {cause}")


class HttpStatusError(SonarrError):
    """Raised when Sonarr answers with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the service.
        method: HTTP method of the failed request.
        endpoint: Resource path relative to the API root.
        body: Service-provided error text (truncated), or None if empty.
    """

    def __init__(
        self,
        status_code: int,
        method: str,
        endpoint: str,
        body: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.method = method
        self.endpoint = endpoint
        self.body = redact(body[:BODY_SNIPPET_LENGTH]) if body else None
        message = f"{method} {endpoint} returned HTTP {status_code}"
        if self.body:
            message = f"{message}: {self.body}"
        super().__init__(message)


class SonarrAuthError(HttpStatusError):
    """Raised when Sonarr rejects the API key (401/403)."""

    pass


class DecodeError(SonarrError):
    """Raised when a response body is not the JSON shape expected."""

    def __init__(self, endpoint: str, reason: str) -> None:
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"Cannot decode response from {endpoint}: {reason}")
