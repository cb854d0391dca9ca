from __future__ import annotations

from header_lines.adapters.contracts import adapter


class SinkFullError(OSError):
    # Fixed-capacity buffer has no room left for the rest of a write.
    pass


class BufferByteSink:
    """In-memory ByteSink.

    Unbounded by default. With ``capacity`` set it behaves like a fixed-size
    buffer: a write that does not fit stores the bytes that do and then raises
    ``SinkFullError``, leaving the stored prefix in place.
    """

    def __init__(self, capacity: int | None = None) -> None:
        if capacity is not None and capacity < 0:
            raise ValueError("capacity must be >= 0")
        self._capacity = capacity
        self._buffer = bytearray()
        self.flush_count = 0

    @property
    def capacity(self) -> int | None:
        return self._capacity

    def write(self, data: bytes) -> int:
        if self._capacity is None:
            self._buffer += data
            return len(data)
        room = self._capacity - len(self._buffer)
        self._buffer += data[:room]
        if len(data) > room:
            raise SinkFullError(f"failed to write whole buffer: {len(data) - room} bytes did not fit")
        return len(data)

    def flush(self) -> None:
        self.flush_count += 1

    def getvalue(self) -> bytes:
        return bytes(self._buffer)

    def close(self) -> None:
        return None


@adapter(kind="memory")
def memory_sink(settings: dict[str, object]) -> BufferByteSink:
    capacity = settings.get("capacity")
    if capacity is not None and (not isinstance(capacity, int) or isinstance(capacity, bool) or capacity < 0):
        raise ValueError("memory_sink.settings.capacity must be a non-negative integer")
    return BufferByteSink(capacity=capacity)
