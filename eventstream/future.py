"""Handles on asynchronous operations."""

from __future__ import annotations

from typing import Callable, Generic, Optional, TypeVar

from .errors import MofkaError

T = TypeVar("T")


class Future(Generic[T]):
    """Tracks an on-going asynchronous operation through a wait and a test function."""

    def __init__(
        self,
        wait_fn: Optional[Callable[[], T]] = None,
        completed_fn: Optional[Callable[[], bool]] = None,
    ):
        self._wait = wait_fn
        self._completed = completed_fn

    def __bool__(self) -> bool:
        return self._wait is not None or self._completed is not None

    def wait(self) -> T:
        """Block until the operation completes and return its result."""
        if self._wait is None:
            raise MofkaError("Calling Future.wait on an invalid future")
        return self._wait()

    def completed(self) -> bool:
        """Tell, without blocking, whether the operation has completed."""
        if self._completed is None:
            raise MofkaError("Calling Future.completed on an invalid future")
        return bool(self._completed())