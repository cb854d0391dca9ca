from .logging import JsonlLogSink, LogMessage, MemoryLogSink, StdoutLogSink, log_jsonl, log_memory, log_stdout

__all__ = [
    "LogMessage",
    "StdoutLogSink",
    "JsonlLogSink",
    "MemoryLogSink",
    "log_stdout",
    "log_jsonl",
    "log_memory",
]
