"""Scoped writer for the header lines of an HTTP-style response.

Example::

    sink = BufferByteSink()
    with HeaderLines(sink) as header:
        with header.line() as line:
            line.write(b"HTTP/1.1 200 OK")
        with header.line() as line:
            line.write(b"Host: iana.org")
    sink.write(b"hello")
    assert sink.getvalue() == b"HTTP/1.1 200 OK\\r\\nHost: iana.org\\r\\n\\r\\nhello"
"""

from .adapters.memory import BufferByteSink
from .errors import HeaderStateError
from .response import write_response
from .writer import CRLF, HeaderLine, HeaderLines

__all__ = ["CRLF", "BufferByteSink", "HeaderLine", "HeaderLines", "HeaderStateError", "write_response"]
