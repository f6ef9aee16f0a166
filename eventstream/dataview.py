"""Views over possibly non-contiguous memory holding the data of an event."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, Union

Buffer = Union[bytes, bytearray, memoryview]


class DataView:
    """A list of memory segments that together hold the data of an event.

    An optional ``free_callback`` is called with ``context`` when the view is closed.
    """

    def __init__(
        self,
        segments: Optional[Union[Buffer, Iterable[Buffer]]] = None,
        context: Any = None,
        free_callback: Optional[Callable[[Any], None]] = None,
    ):
        if segments is None:
            segments = ()
        elif isinstance(segments, (bytes, bytearray, memoryview)):
            segments = (segments,)
        self._segments = tuple(memoryview(seg).cast("B") for seg in segments)
        self._size = sum(len(seg) for seg in self._segments)
        self._context = context
        self._free = free_callback
        self._closed = False

    def size(self) -> int:
        """Total size in bytes."""
        return self._size

    def segments(self) -> tuple[memoryview, ...]:
        return self._segments

    def context(self) -> Any:
        return self._context

    def write(self, source: Buffer, offset: int = 0) -> int:
        """Copy ``source`` into the view starting at ``offset``; return bytes written."""
        if offset < 0:
            raise ValueError("offset must be non-negative")
        data = memoryview(source).cast("B")
        written = 0
        for seg in self._segments:
            if written >= len(data):
                break
            if offset >= len(seg):
                offset -= len(seg)
                continue
            count = min(len(data) - written, len(seg) - offset)
            seg[offset:offset + count] = data[written:written + count]
            written += count
            offset = 0
        return written

    def read(self, size: int, offset: int = 0) -> bytes:
        """Return up to ``size`` bytes of the view starting at ``offset``."""
        if offset < 0 or size < 0:
            raise ValueError("size and offset must be non-negative")
        chunks = []
        remaining = size
        for seg in self._segments:
            if remaining == 0:
                break
            if offset >= len(seg):
                offset -= len(seg)
                continue
            count = min(remaining, len(seg) - offset)
            chunks.append(seg[offset:offset + count].tobytes())
            remaining -= count
            offset = 0
        return b"".join(chunks)

    def close(self) -> None:
        """Release the view, calling the free callback once."""
        if self._closed:
            return
        self._closed = True
        if self._free is not None:
            self._free(self._context)

    def __enter__(self) -> "DataView":
        return self

    def __exit__(self, *args) -> None:
        self.close()