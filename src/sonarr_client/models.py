"""Sonarr API response models.

This module defines dataclasses for the Sonarr v3 resources the client reads
and writes. Wire field names are lower camel case (e.g. ``seriesId``).

EpisodeRecord is written back to Sonarr with a full-resource PUT, so it keeps
the complete decoded object in ``raw``. Fields this package does not model
are sent back exactly as they were read.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeVar

from sonarr_client.errors import DecodeError

T = TypeVar("T")


def _require_int(endpoint: str, data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    # bool is a subclass of int but never a valid identifier
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(endpoint, f"field '{key}' must be an integer, got {value!r}")
    return value


def _optional_int(endpoint: str, data: Mapping[str, Any], key: str) -> int | None:
    if data.get(key) is None:
        return None
    return _require_int(endpoint, data, key)


def _require_str(endpoint: str, data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise DecodeError(endpoint, f"field '{key}' must be a string, got {value!r}")
    return value


def _require_bool(endpoint: str, data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    if not isinstance(value, bool):
        raise DecodeError(endpoint, f"field '{key}' must be a boolean, got {value!r}")
    return value


def _require_object(endpoint: str, data: Any) -> Mapping[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(
            endpoint, f"expected a JSON object, got {type(data).__name__}"
        )
    return data


@dataclass(frozen=True)
class SeriesRecord:
    """Series object from Sonarr API (subset of fields)."""

    title: str
    id: int
    tags: tuple[int, ...] | None = None

    def __repr__(self) -> str:
        return f"{self.title}({self.id})"

    __str__ = __repr__

    @classmethod
    def from_wire(cls, data: Any, endpoint: str = "series") -> SeriesRecord:
        """Decode a series JSON object.

        Args:
            data: Series JSON object from API.
            endpoint: Endpoint name reported on decode failure.

        Returns:
            SeriesRecord.

        Raises:
            DecodeError: If a required field is missing or mistyped.
        """
        obj = _require_object(endpoint, data)
        tags: tuple[int, ...] | None = None
        raw_tags = obj.get("tags")
        if raw_tags is not None:
            if not isinstance(raw_tags, list):
                raise DecodeError(endpoint, f"field 'tags' must be a list, got {raw_tags!r}")
            tags = tuple(
                _require_int(endpoint, {"tags": tag}, "tags") for tag in raw_tags
            )
        return cls(
            title=_require_str(endpoint, obj, "title"),
            id=_require_int(endpoint, obj, "id"),
            tags=tags,
        )


@dataclass(frozen=True)
class Tag:
    """Tag object from Sonarr API."""

    label: str
    id: int

    @classmethod
    def from_wire(cls, data: Any, endpoint: str = "tag") -> Tag:
        """Decode a tag JSON object."""
        obj = _require_object(endpoint, data)
        return cls(
            label=_require_str(endpoint, obj, "label"),
            id=_require_int(endpoint, obj, "id"),
        )


@dataclass(frozen=True)
class EpisodeRecord:
    """Episode object from Sonarr API.

    ``raw`` holds the full object as returned by Sonarr and is what
    to_wire() starts from, so a read-modify-write never drops fields.
    """

    id: int
    series_id: int
    episode_file_id: int | None
    title: str
    season_number: int
    episode_number: int
    monitored: bool
    raw: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), repr=False, compare=False
    )

    @property
    def has_file(self) -> bool:
        """Whether a media file is attached.

        Sonarr reports ``episodeFileId: 0`` for episodes without a file.
        """
        return bool(self.episode_file_id)

    @classmethod
    def from_wire(cls, data: Any, endpoint: str = "episode") -> EpisodeRecord:
        """Decode an episode JSON object.

        Args:
            data: Episode JSON object from API.
            endpoint: Endpoint name reported on decode failure.

        Returns:
            EpisodeRecord carrying the full object in ``raw``.

        Raises:
            DecodeError: If a required field is missing or mistyped.
        """
        obj = _require_object(endpoint, data)
        return cls(
            id=_require_int(endpoint, obj, "id"),
            series_id=_require_int(endpoint, obj, "seriesId"),
            episode_file_id=_optional_int(endpoint, obj, "episodeFileId"),
            title=_require_str(endpoint, obj, "title"),
            season_number=_require_int(endpoint, obj, "seasonNumber"),
            episode_number=_require_int(endpoint, obj, "episodeNumber"),
            monitored=_require_bool(endpoint, obj, "monitored"),
            raw=MappingProxyType(dict(obj)),
        )

    def with_monitored(self, monitored: bool) -> EpisodeRecord:
        """Return a copy with only the monitored flag changed."""
        return dataclasses.replace(self, monitored=monitored)

    def to_wire(self) -> dict[str, Any]:
        """Encode the record for a full-resource PUT.

        Returns:
            The originally decoded object with modelled fields set to their
            current values. Unmodelled fields are passed through untouched.
        """
        wire = dict(self.raw)
        wire.update(
            {
                "id": self.id,
                "seriesId": self.series_id,
                "title": self.title,
                "seasonNumber": self.season_number,
                "episodeNumber": self.episode_number,
                "monitored": self.monitored,
            }
        )
        if self.episode_file_id is not None or "episodeFileId" in wire:
            wire["episodeFileId"] = self.episode_file_id
        return wire


def decode_list(
    endpoint: str,
    payload: Any,
    decode: Callable[[Any, str], T],
) -> list[T]:
    """Decode a JSON array, preserving server order.

    Args:
        endpoint: Endpoint name reported on decode failure.
        payload: Parsed JSON body.
        decode: Per-item decoder, e.g. ``SeriesRecord.from_wire``.

    Returns:
        Decoded items in the order returned by the service.

    Raises:
        DecodeError: If the payload is not a list or an item fails to decode.
    """
    if not isinstance(payload, list):
        raise DecodeError(endpoint, f"expected a JSON array, got {type(payload).__name__}")
    return [decode(item, endpoint) for item in payload]
