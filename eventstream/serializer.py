"""Serializers turning event metadata into bytes and back."""

from __future__ import annotations

import abc
import json
import struct
from typing import Any, BinaryIO, Callable

from .errors import MofkaError

_SIZE = struct.Struct("<Q")


def _as_json(metadata: Any) -> Any:
    if isinstance(metadata, (str, bytes, bytearray)):
        try:
            return json.loads(metadata)
        except ValueError as ex:
            raise MofkaError(f"Could not parse metadata: {ex}") from ex
    return metadata


class Serializer(abc.ABC):
    """Interface of objects that write metadata to and read it from a binary stream."""

    @abc.abstractmethod
    def serialize(self, stream: BinaryIO, metadata: Any) -> None:
        """Write ``metadata`` into ``stream``."""

    @abc.abstractmethod
    def deserialize(self, stream: BinaryIO) -> Any:
        """Read one piece of metadata from ``stream`` and return it."""

    @abc.abstractmethod
    def metadata(self) -> dict:
        """Configuration from which an identical serializer can be created."""


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if data is None or len(data) != size:
        raise MofkaError(
            "Could not deserialize Serializer metadata: unexpected end of input"
        )
    return data


class DefaultSerializer(Serializer):
    """Writes metadata as compact JSON text preceded by its 64-bit length."""

    def serialize(self, stream: BinaryIO, metadata: Any) -> None:
        text = json.dumps(
            _as_json(metadata),
            separators=(",", ":"),
            sort_keys=True,
            ensure_ascii=False,
        ).encode("utf-8")
        stream.write(_SIZE.pack(len(text)))
        stream.write(text)

    def deserialize(self, stream: BinaryIO) -> Any:
        (size,) = _SIZE.unpack(_read_exact(stream, _SIZE.size))
        payload = _read_exact(stream, size)
        try:
            return json.loads(payload.decode("utf-8"))
        except ValueError as ex:
            raise MofkaError(f"Could not deserialize Serializer metadata: {ex}") from ex

    def metadata(self) -> dict:
        return {"type": "default"}

    @classmethod
    def create(cls, metadata: Any) -> "DefaultSerializer":
        return cls()


_FACTORIES: dict[str, Callable[[Any], Any]] = {}


def register_serializer(name: str, factory: Callable[[Any], Any]) -> None:
    """Make ``factory`` build serializers whose configuration has ``"type": name``."""
    if not callable(factory):
        raise TypeError("factory must be callable")
    _FACTORIES[name] = factory


def serializer_from_metadata(metadata: Any):
    """Build a serializer from its configuration; a missing "type" means default."""
    config = _as_json(metadata)
    if not isinstance(config, dict):
        raise MofkaError(
            "Cannot create Serializer from Metadata: "
            "invalid Metadata (expected JSON object)"
        )
    if "type" not in config:
        return DefaultSerializer()
    kind = config["type"]
    if not isinstance(kind, str):
        raise MofkaError(
            "Cannot create Serializer from Metadata: "
            'invalid "type" field in Metadata (expected string)'
        )
    factory = _FACTORIES.get(kind)
    if factory is None:
        raise MofkaError(f'Unknown Serializer type "{kind}"')
    return factory(config)


register_serializer("default", DefaultSerializer.create)