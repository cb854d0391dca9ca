from __future__ import annotations

from collections.abc import Iterable

from header_lines.ports.byte_sink import ByteSink
from header_lines.ports.log_sink import LogSink
from header_lines.writer import HeaderLines


def write_response(
    sink: ByteSink,
    status_line: str,
    headers: Iterable[tuple[str, str]] = (),
    body: bytes = b"",
    *,
    encoding: str = "latin-1",
    log_sink: LogSink | None = None,
) -> None:
    # Status line, one "Name: value" line per field, blank line, body. Names and values are not validated.
    with HeaderLines(sink, log_sink=log_sink) as header:
        header.write_line(status_line, encoding)
        for name, value in headers:
            with header.line() as line:
                line.write_text(name, encoding)
                line.write(b": ")
                line.write_text(value, encoding)
    if body:
        sink.write(body)
