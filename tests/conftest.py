"""Shared test fixtures for sonarr-client."""

from __future__ import annotations

import copy
import json
import threading
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from sonarr_client.client import SonarrClient
from sonarr_client.logging.redaction import clear_secrets

API_KEY = "test-api-key-12345"  # pragma: allowlist secret
BASE_URL = "http://sonarr.test:8989"


def make_episode(episode_id: int, **overrides: Any) -> dict[str, Any]:
    """Build an episode wire object with the fields Sonarr v3 returns."""
    episode = {
        "seriesId": 42,
        "tvdbId": 349232,
        "episodeFileId": 555,
        "seasonNumber": 1,
        "episodeNumber": episode_id,
        "title": f"Episode {episode_id}",
        "airDate": "2008-01-20",
        "airDateUtc": "2008-01-21T03:00:00Z",
        "overview": "Walter makes a decision.",
        "hasFile": True,
        "monitored": True,
        "absoluteEpisodeNumber": episode_id,
        "unverifiedSceneNumbering": False,
        "images": [{"coverType": "screenshot", "url": "/MediaCover/1.jpg"}],
        "id": episode_id,
    }
    episode.update(overrides)
    return episode


class FakeSonarr:
    """In-memory Sonarr v3 service served through httpx.MockTransport.

    Has no concurrency control, like the real episode endpoint: a PUT
    replaces whatever is stored.

    Attributes:
        series: Series wire objects returned by GET series.
        tags: Tag wire objects returned by GET tag.
        episodes: Episode wire objects keyed by id.
        episode_files: Ids of episode files that exist.
        requests: Every request received, in order.
        failures: (method, path) -> (status, body) to answer instead.
        on_episode_read: Called with the episode id after a GET episode/{id}
            has copied the stored record, before the response is returned.
    """

    def __init__(self) -> None:
        self.series: list[dict[str, Any]] = []
        self.tags: list[dict[str, Any]] = []
        self.episodes: dict[int, dict[str, Any]] = {}
        self.episode_files: set[int] = set()
        self.requests: list[httpx.Request] = []
        self.failures: dict[tuple[str, str], tuple[int, str]] = {}
        self.on_episode_read: Callable[[int], None] | None = None
        self._lock = threading.Lock()

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def requests_for(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r
            for r in self.requests
            if r.method == method and r.url.path == f"/api/v3/{path}"
        ]

    def handle(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(request)
        path = request.url.path
        if not path.startswith("/api/v3/"):
            return httpx.Response(404, text="Not Found")
        resource = path[len("/api/v3/") :]

        failure = self.failures.get((request.method, resource))
        if failure is not None:
            status, body = failure
            return httpx.Response(status, text=body)

        collection, _, ident = resource.partition("/")
        if request.method == "GET" and resource == "series":
            tvdb_id = request.url.params.get("tvdbId")
            matches = [s for s in self.series if str(s.get("tvdbId")) == tvdb_id]
            return httpx.Response(200, json=matches)
        if request.method == "GET" and resource == "tag":
            return httpx.Response(200, json=self.tags)
        if request.method == "GET" and resource == "episode":
            series_id = int(request.url.params["seriesId"])
            with self._lock:
                matches = [
                    copy.deepcopy(e)
                    for e in self.episodes.values()
                    if e["seriesId"] == series_id
                ]
            return httpx.Response(200, json=matches)
        if collection == "episode" and ident:
            return self._episode(request, int(ident))
        if collection == "episodefile" and ident and request.method == "DELETE":
            file_id = int(ident)
            with self._lock:
                if file_id not in self.episode_files:
                    return httpx.Response(404, json={"message": "NotFound"})
                self.episode_files.discard(file_id)
            return httpx.Response(204)
        return httpx.Response(405, text="Method Not Allowed")

    def _episode(self, request: httpx.Request, episode_id: int) -> httpx.Response:
        if request.method == "GET":
            with self._lock:
                stored = self.episodes.get(episode_id)
                snapshot = copy.deepcopy(stored) if stored is not None else None
            if snapshot is None:
                return httpx.Response(404, json={"message": "NotFound"})
            if self.on_episode_read is not None:
                self.on_episode_read(episode_id)
            return httpx.Response(200, json=snapshot)
        if request.method == "PUT":
            body = json.loads(request.content)
            with self._lock:
                if episode_id not in self.episodes:
                    return httpx.Response(404, json={"message": "NotFound"})
                self.episodes[episode_id] = body
            return httpx.Response(202, json=body)
        return httpx.Response(405, text="Method Not Allowed")


@pytest.fixture(autouse=True)
def reset_secrets():
    """Forget API keys registered by earlier tests."""
    yield
    clear_secrets()


@pytest.fixture
def fake_sonarr() -> FakeSonarr:
    """Create an empty fake Sonarr service."""
    return FakeSonarr()


@pytest.fixture
def sonarr(fake_sonarr: FakeSonarr):
    """Create a SonarrClient wired to the fake service."""
    client = SonarrClient(BASE_URL, API_KEY, transport=fake_sonarr.transport())
    yield client
    client.close()


@pytest.fixture
def api_key() -> str:
    """Return the API key the test clients are built with."""
    return API_KEY


@pytest.fixture
def base_url() -> str:
    """Return the base URL the test clients are built with."""
    return BASE_URL


@pytest.fixture
def episode_factory() -> Callable[..., dict[str, Any]]:
    """Return the episode wire-object builder."""
    return make_episode
