"""Partition selectors deciding which partition receives each event."""

from __future__ import annotations

import abc
import json
from typing import Any, Callable, Optional, Sequence

from .errors import MofkaError


def _as_json(metadata: Any) -> Any:
    if isinstance(metadata, (str, bytes, bytearray)):
        try:
            return json.loads(metadata)
        except ValueError as ex:
            raise MofkaError(f"Could not parse metadata: {ex}") from ex
    return metadata


class PartitionSelector(abc.ABC):
    """Interface of objects that pick a target partition for each event."""

    @abc.abstractmethod
    def set_partitions(self, targets: Sequence[Any]) -> None:
        """Set the partitions available to store events."""

    @abc.abstractmethod
    def select_partition_for(self, metadata: Any, requested: Optional[int] = None) -> int:
        """Return the index, in the list of targets, of the partition to use."""

    @abc.abstractmethod
    def metadata(self) -> dict:
        """Configuration from which an identical selector can be created."""


class DefaultPartitionSelector(PartitionSelector):
    """Round-robin over the partitions, honouring a requested partition."""

    def __init__(self):
        self._index = 0
        self._targets: list[Any] = []

    def set_partitions(self, targets: Sequence[Any]) -> None:
        self._targets = list(targets)

    def select_partition_for(self, metadata: Any, requested: Optional[int] = None) -> int:
        if not self._targets:
            raise MofkaError("PartitionSelector has no target to select from")
        count = len(self._targets)
        if requested is not None:
            if requested < 0:
                raise ValueError("requested partition must be non-negative")
            return requested % count
        selected = self._index
        self._index = (self._index + 1) % count
        return selected

    def metadata(self) -> dict:
        return {"type": "default"}

    @classmethod
    def create(cls, metadata: Any) -> "DefaultPartitionSelector":
        return cls()


_FACTORIES: dict[str, Callable[[Any], Any]] = {}


def register_partition_selector(name: str, factory: Callable[[Any], Any]) -> None:
    """Make ``factory`` build selectors whose configuration has ``"type": name``."""
    if not callable(factory):
        raise TypeError("factory must be callable")
    _FACTORIES[name] = factory


def partition_selector_from_metadata(metadata: Any):
    """Build a selector from its configuration; a missing "type" means default."""
    config = _as_json(metadata)
    if not isinstance(config, dict):
        raise MofkaError(
            "Cannot create PartitionSelector from Metadata: "
            "invalid Metadata (expected JSON object)"
        )
    if "type" not in config:
        return DefaultPartitionSelector()
    kind = config["type"]
    if not isinstance(kind, str):
        raise MofkaError(
            "Cannot create PartitionSelector from Metadata: "
            'invalid "type" field in Metadata (expected string)'
        )
    factory = _FACTORIES.get(kind)
    if factory is None:
        raise MofkaError(f'Unknown PartitionSelector type "{kind}"')
    return factory(config)


register_partition_selector("default", DefaultPartitionSelector.create)