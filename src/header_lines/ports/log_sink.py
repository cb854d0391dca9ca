from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from header_lines.observability.logging import LogMessage


# LogSink port receives structured diagnostics (suppressed terminator failures, CLI lifecycle).
@runtime_checkable
class LogSink(Protocol):
    def emit(self, message: "LogMessage") -> None:
        """Deliver one structured log record."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("LogSink is a port; use a concrete adapter.")
