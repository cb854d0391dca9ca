from __future__ import annotations

from collections.abc import Callable
from types import TracebackType

from header_lines.errors import HeaderStateError
from header_lines.observability.logging import LogMessage
from header_lines.ports.byte_sink import ByteSink
from header_lines.ports.log_sink import LogSink

CRLF = b"\r\n"


class HeaderLine:
    """A single header line open for writing.

    Bytes written here go verbatim to the sink. Closing the line (explicitly or
    by leaving its ``with`` block) appends exactly one CRLF. Content must not
    contain CRLF itself; that is not checked.
    """

    def __init__(self, sink: ByteSink, *, owner: HeaderLines | None = None) -> None:
        self._sink = sink
        self._owner = owner
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data: bytes) -> int:
        if self._closed:
            raise HeaderStateError("write to a closed header line")
        # Sink failures propagate unchanged; no retry.
        self._sink.write(data)
        return len(data)

    def write_text(self, text: str, encoding: str = "latin-1") -> int:
        return self.write(text.encode(encoding))

    def flush(self) -> None:
        flush = getattr(self._sink, "flush", None)
        if flush is not None:
            flush()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._sink.write(CRLF)
        finally:
            # The block gets exclusive access back even when the terminator write failed.
            if self._owner is not None:
                self._owner._release(self)

    def __enter__(self) -> HeaderLine:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.close()
            return
        log_sink = self._owner.log_sink if self._owner is not None else None
        _close_best_effort(self.close, log_sink, scope="line", cause=exc)


class HeaderLines:
    """Writes the lines of a response header into a byte sink.

    A header is any number of CRLF-terminated lines followed by one more CRLF
    before the body. Use it as a context manager::

        with HeaderLines(sink) as header:
            with header.line() as line:
                line.write(b"HTTP/1.1 200 OK")
            header.write_line(b"Host: iana.org")
        sink.write(b"hello")

    Only one line may be open at a time; asking for another line, or closing the
    block, while a line is open raises ``HeaderStateError``. On close the blank
    line is written once and the sink is flushed (when ``flush`` is true and the
    sink has a ``flush`` method).

    When the ``with`` block exits because of an exception, terminator and flush
    failures are reported to ``log_sink`` and otherwise dropped, so the original
    exception is the one that propagates. A log sink that fails is ignored too.
    """

    def __init__(self, sink: ByteSink, *, flush: bool = True, log_sink: LogSink | None = None) -> None:
        # Construction performs no I/O.
        self._sink = sink
        self._flush = flush
        self.log_sink = log_sink
        self._active: HeaderLine | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def line(self) -> HeaderLine:
        if self._closed:
            raise HeaderStateError("header block is already closed")
        if self._active is not None:
            raise HeaderStateError("previous header line is still open")
        self._active = HeaderLine(self._sink, owner=self)
        return self._active

    def write_line(self, data: bytes | str, encoding: str = "latin-1") -> None:
        # One-shot helper: open, write and terminate a line.
        with self.line() as line:
            if isinstance(data, str):
                line.write_text(data, encoding)
            else:
                line.write(data)

    def close(self) -> None:
        if self._closed:
            return
        if self._active is not None:
            raise HeaderStateError("cannot close header block while a header line is open")
        self._closed = True
        self._sink.write(CRLF)
        if self._flush:
            flush = getattr(self._sink, "flush", None)
            if flush is not None:
                flush()

    def _release(self, line: HeaderLine) -> None:
        if self._active is line:
            self._active = None

    def __enter__(self) -> HeaderLines:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.close()
            return
        _close_best_effort(self.close, self.log_sink, scope="header", cause=exc)


def _close_best_effort(
    close: Callable[[], None],
    log_sink: LogSink | None,
    *,
    scope: str,
    cause: BaseException | None,
) -> None:
    # Unwind path: neither the close failure nor a failing log sink may replace the exception in flight.
    try:
        close()
    except Exception as err:
        suppressed = err
    else:
        return
    if log_sink is None:
        return
    message = LogMessage(
        level="warning",
        message="terminator write suppressed during unwind",
        fields={"scope": scope, "error": repr(suppressed), "cause": repr(cause)},
    )
    try:
        log_sink.emit(message)
    except Exception:
        pass
