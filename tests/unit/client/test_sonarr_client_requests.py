"""Unit tests for the requests SonarrClient sends and how it handles replies."""

import json
from unittest.mock import MagicMock, patch

import httpx
import pytest

from sonarr_client.client import SonarrClient
from sonarr_client.errors import (
    DecodeError,
    HttpStatusError,
    SonarrAuthError,
    TransportError,
)
from sonarr_client.models import EpisodeRecord, SeriesRecord, Tag


@pytest.fixture
def mock_http_client():
    """Patch httpx.Client and return the instance SonarrClient will use."""
    with patch("sonarr_client.client.httpx.Client") as mock_client_class:
        mock_http_client = MagicMock()
        mock_client_class.return_value = mock_http_client
        yield mock_http_client


@pytest.fixture
def client(mock_http_client: MagicMock) -> SonarrClient:
    """Create a SonarrClient backed by the mocked httpx client."""
    return SonarrClient("http://localhost:8989", "test-api-key-12345")


def _response(status_code: int, payload=None, text: str | None = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.is_success = 200 <= status_code < 300
    response.text = text if text is not None else json.dumps(payload)
    response.json.return_value = payload
    return response


class TestRequestShapes:
    """Tests for method, path and parameters of each operation."""

    def test_series_by_tvdb_id(self, client: SonarrClient, mock_http_client: MagicMock):
        mock_http_client.request.return_value = _response(200, [])

        client.series_by_tvdb_id("81189")

        mock_http_client.request.assert_called_once_with(
            "GET", "series", params={"tvdbId": "81189"}, json=None
        )

    def test_series_by_int_tvdb_id(self, client: SonarrClient, mock_http_client: MagicMock):
        mock_http_client.request.return_value = _response(200, [])

        client.series_by_tvdb_id(81189)

        assert mock_http_client.request.call_args.kwargs["params"] == {"tvdbId": "81189"}

    def test_tags(self, client: SonarrClient, mock_http_client: MagicMock):
        mock_http_client.request.return_value = _response(200, [])

        client.tags()

        mock_http_client.request.assert_called_once_with(
            "GET", "tag", params=None, json=None
        )

    def test_episodes_by_series(self, client: SonarrClient, mock_http_client: MagicMock):
        mock_http_client.request.return_value = _response(200, [])

        client.episodes_by_series(42)

        mock_http_client.request.assert_called_once_with(
            "GET", "episode", params={"seriesId": "42"}, json=None
        )

    def test_delete_episode_file_uses_path_segment(
        self, client: SonarrClient, mock_http_client: MagicMock
    ):
        mock_http_client.request.return_value = _response(204, text="")

        client.delete_episode_file(555)

        mock_http_client.request.assert_called_once_with(
            "DELETE", "episodefile/555", params=None, json=None
        )

    def test_delete_episode_file_does_not_decode_body(
        self, client: SonarrClient, mock_http_client: MagicMock
    ):
        """Test that a 204 succeeds without any body decoding."""
        response = _response(204, text="")
        mock_http_client.request.return_value = response

        client.delete_episode_file(555)

        response.json.assert_not_called()

    @pytest.mark.parametrize("bad_id", ["555", "../series", 5.5, True, None])
    def test_non_int_ids_rejected(self, client: SonarrClient, mock_http_client: MagicMock, bad_id):
        """Test that caller input cannot change the resource path."""
        with pytest.raises(TypeError):
            client.delete_episode_file(bad_id)
        with pytest.raises(TypeError):
            client.unmonitor_episode(bad_id)
        mock_http_client.request.assert_not_called()

    def test_negative_id_rejected(self, client: SonarrClient, mock_http_client: MagicMock):
        with pytest.raises(ValueError):
            client.get_episode(-1)
        mock_http_client.request.assert_not_called()

    def test_series_id_must_be_int(self, client: SonarrClient, mock_http_client: MagicMock):
        with pytest.raises(TypeError):
            client.episodes_by_series("42&monitored=false")
        mock_http_client.request.assert_not_called()


class TestDecoding:
    """Tests for response decoding."""

    def test_series_preserves_server_order(
        self, client: SonarrClient, mock_http_client: MagicMock
    ):
        payload = [
            {"title": "Zeta", "id": 9, "tags": []},
            {"title": "Alpha", "id": 3},
            {"title": "Mu", "id": 5, "tags": [7]},
        ]
        mock_http_client.request.return_value = _response(200, payload)

        series = client.series_by_tvdb_id("81189")

        assert len(series) == len(payload)
        assert [s.id for s in series] == [9, 3, 5]
        assert series[1] == SeriesRecord(title="Alpha", id=3, tags=None)

    def test_tags_decoded(self, client: SonarrClient, mock_http_client: MagicMock):
        mock_http_client.request.return_value = _response(
            200, [{"label": "anime", "id": 1}, {"label": "keep", "id": 2}]
        )

        assert client.tags() == [Tag(label="anime", id=1), Tag(label="keep", id=2)]

    def test_episodes_decoded(
        self, client: SonarrClient, mock_http_client: MagicMock, episode_factory
    ):
        payload = [episode_factory(1), episode_factory(2, episodeFileId=0, hasFile=False)]
        mock_http_client.request.return_value = _response(200, payload)

        episodes = client.episodes_by_series(42)

        assert [e.id for e in episodes] == [1, 2]
        assert isinstance(episodes[0], EpisodeRecord)
        assert episodes[0].has_file is True
        assert episodes[1].has_file is False

    def test_invalid_json_raises_decode_error(
        self, client: SonarrClient, mock_http_client: MagicMock
    ):
        response = _response(200, text="<html>")
        response.json.side_effect = json.JSONDecodeError("Expecting value", "<html>", 0)
        mock_http_client.request.return_value = response

        with pytest.raises(DecodeError) as exc_info:
            client.tags()

        assert exc_info.value.endpoint == "tag"

    def test_wrong_shape_raises_decode_error(
        self, client: SonarrClient, mock_http_client: MagicMock
    ):
        mock_http_client.request.return_value = _response(200, {"title": "x", "id": 1})

        with pytest.raises(DecodeError, match="series"):
            client.series_by_tvdb_id("81189")


class TestErrorHandling:
    """Tests for transport and status errors."""

    def test_connect_error(self, client: SonarrClient, mock_http_client: MagicMock):
        mock_http_client.request.side_effect = httpx.ConnectError("Connection refused")

        with pytest.raises(TransportError, match="Connection refused") as exc_info:
            client.tags()

        assert exc_info.value.endpoint == "tag"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_timeout_error(self, client: SonarrClient, mock_http_client: MagicMock):
        mock_http_client.request.side_effect = httpx.ReadTimeout("Timeout")

        with pytest.raises(TransportError):
            client.episodes_by_series(1)

    def test_too_many_redirects(self, client: SonarrClient, mock_http_client: MagicMock):
        mock_http_client.request.side_effect = httpx.TooManyRedirects("Exceeded maximum")

        with pytest.raises(TransportError) as exc_info:
            client.tags()

        assert isinstance(exc_info.value.__cause__, httpx.TooManyRedirects)

    def test_content_decoding_error(self, client: SonarrClient, mock_http_client: MagicMock):
        mock_http_client.request.side_effect = httpx.DecodingError("incorrect header check")

        with pytest.raises(DecodeError) as exc_info:
            client.get_episode(7)

        assert exc_info.value.endpoint == "episode/7"
        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)

    def test_not_found(self, client: SonarrClient, mock_http_client: MagicMock):
        mock_http_client.request.return_value = _response(
            404, text='{"message": "NotFound"}'
        )

        with pytest.raises(HttpStatusError) as exc_info:
            client.get_episode(7)

        assert exc_info.value.status_code == 404
        assert exc_info.value.endpoint == "episode/7"
        assert exc_info.value.body == '{"message": "NotFound"}'
        assert not isinstance(exc_info.value, SonarrAuthError)

    @pytest.mark.parametrize("status_code", [401, 403])
    def test_auth_error(self, client: SonarrClient, mock_http_client: MagicMock, status_code):
        mock_http_client.request.return_value = _response(status_code, text="Unauthorized")

        with pytest.raises(SonarrAuthError) as exc_info:
            client.tags()

        assert exc_info.value.status_code == status_code
        assert isinstance(exc_info.value, HttpStatusError)

    def test_empty_error_body_is_none(self, client: SonarrClient, mock_http_client: MagicMock):
        mock_http_client.request.return_value = _response(500, text="")

        with pytest.raises(HttpStatusError) as exc_info:
            client.delete_episode_file(1)

        assert exc_info.value.body is None
        assert str(exc_info.value) == "DELETE episodefile/1 returned HTTP 500"

    def test_api_key_not_in_error_text(self, client: SonarrClient, mock_http_client: MagicMock):
        """Test that a service echoing the key does not leak it."""
        mock_http_client.request.return_value = _response(
            400, text="bad request for key test-api-key-12345"
        )

        with pytest.raises(HttpStatusError) as exc_info:
            client.tags()

        assert "test-api-key-12345" not in str(exc_info.value)
        assert "test-api-key-12345" not in (exc_info.value.body or "")


class TestCorruptEncodedBody:
    """Tests for a 2xx reply whose Content-Encoding cannot be decoded."""

    def test_corrupt_gzip_body_raises_decode_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, headers={"Content-Encoding": "gzip"}, content=b"notgzip"
            )

        with SonarrClient(
            "http://localhost:8989",
            "test-api-key-12345",
            transport=httpx.MockTransport(handler),
        ) as client:
            with pytest.raises(DecodeError) as exc_info:
                client.tags()

        assert exc_info.value.endpoint == "tag"
