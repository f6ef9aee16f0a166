"""Strongly typed parameters for producers and consumers."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_SIZE_MAX = 2**64 - 1


def _check(value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError("value must be an integer")
    if not 0 <= value <= _SIZE_MAX:
        raise ValueError(f"value must be between 0 and {_SIZE_MAX}")


@dataclass(frozen=True, order=True)
class BatchSize:
    """Batch size to use when creating a producer or consumer."""

    value: int

    def __post_init__(self):
        _check(self.value)

    @classmethod
    def adaptive(cls) -> "BatchSize":
        """Let the producer adapt the batch size to the workload."""
        return cls(_SIZE_MAX)


@dataclass(frozen=True, order=True)
class MaxNumBatches:
    """Maximum number of batches pending at any time."""

    value: int

    def __post_init__(self):
        _check(self.value)

    @classmethod
    def infinity(cls) -> "MaxNumBatches":
        return cls(_SIZE_MAX)


@dataclass(frozen=True, order=True)
class NumEvents:
    """A number of events."""

    value: int

    def __post_init__(self):
        _check(self.value)

    @classmethod
    def infinity(cls) -> "NumEvents":
        """A count larger than any application will reach."""
        return cls(_SIZE_MAX)


class Ordering(enum.Enum):
    """Whether events must be stored in the order they are produced."""

    STRICT = True
    LOOSE = False