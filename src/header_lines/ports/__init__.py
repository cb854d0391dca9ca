from .byte_sink import ByteSink
from .log_sink import LogSink

__all__ = ["ByteSink", "LogSink"]
