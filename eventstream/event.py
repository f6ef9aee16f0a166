"""Events delivered to consumers."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from .dataview import DataView
from .errors import MofkaError


class EventInterface(Protocol):
    """What an event implementation provided by a driver must offer."""

    def metadata(self) -> Any: ...

    def data(self) -> DataView: ...

    def partition(self) -> Any: ...

    def id(self) -> int: ...

    def acknowledge(self) -> None: ...


class Event:
    """Handle on an event: its metadata, data, origin partition and ID."""

    def __init__(self, impl: Optional[EventInterface] = None):
        self._impl = impl

    def __bool__(self) -> bool:
        return self._impl is not None

    def _get(self) -> EventInterface:
        if self._impl is None:
            raise MofkaError("Invalid Event")
        return self._impl

    def metadata(self) -> Any:
        return self._get().metadata()

    def data(self) -> DataView:
        return self._get().data()

    def partition(self) -> Any:
        """Information about the partition the event comes from."""
        return self._get().partition()

    def id(self) -> int:
        return self._get().id()

    def acknowledge(self) -> None:
        """Mark the event as processed; consumers restart after the last one."""
        self._get().acknowledge()