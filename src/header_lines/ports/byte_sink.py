from __future__ import annotations

from typing import Protocol, runtime_checkable


# ByteSink port: any destination that accepts bytes and reports write failures by raising.
@runtime_checkable
class ByteSink(Protocol):
    def write(self, data: bytes) -> object:
        """Write the whole buffer or raise; partial writes are not retried by callers."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("ByteSink is a port; use a concrete adapter.")

    def flush(self) -> None:
        """Push buffered bytes to the underlying destination."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("ByteSink is a port; use a concrete adapter.")
