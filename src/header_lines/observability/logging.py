"""Structured diagnostics for header writing.

The writer emits a ``warning`` record when a terminator or flush failure is
suppressed while an exception is already propagating; the CLI emits an
``info`` record once a response has been written. Records are rendered as
compact JSON objects, one per line.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import TextIO

from header_lines.adapters.contracts import adapter

LEVELS = frozenset({"debug", "info", "warning", "error"})


@dataclass(frozen=True, slots=True)
class LogMessage:
    level: str
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    fields: dict[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.message:
            raise ValueError("LogMessage requires a non-empty message")
        if self.level not in LEVELS:
            raise ValueError(f"LogMessage level must be one of {sorted(LEVELS)}, got {self.level!r}")

    def to_json(self) -> str:
        record = {
            "level": self.level,
            "message": self.message,
            "timestamp": self.timestamp.isoformat().replace("+00:00", "Z"),
            "fields": self.fields,
        }
        # repr() fallback keeps exception objects in fields from breaking a diagnostic write.
        return json.dumps(record, separators=(",", ":"), ensure_ascii=False, default=repr)


class StdoutLogSink:
    def emit(self, message: LogMessage) -> None:
        print(message.to_json())

    def close(self) -> None:
        return None


class JsonlLogSink:
    # Appends to the file, flushing per record so a crashed run keeps its warnings.
    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file: TextIO | None = self._path.open("a", encoding="utf-8")

    def emit(self, message: LogMessage) -> None:
        if self._file is None:
            raise ValueError(f"log file {self._path} is closed")
        self._file.write(message.to_json() + "\n")
        self._file.flush()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


class MemoryLogSink:
    def __init__(self) -> None:
        self.records: list[LogMessage] = []

    def emit(self, message: LogMessage) -> None:
        self.records.append(message)

    def close(self) -> None:
        return None


@adapter(kind="stdout")
def log_stdout(settings: dict[str, object]) -> StdoutLogSink:
    _ = settings
    return StdoutLogSink()


@adapter(kind="jsonl")
def log_jsonl(settings: dict[str, object]) -> JsonlLogSink:
    path = settings.get("path")
    if not isinstance(path, str) or not path:
        raise ValueError("log_jsonl.settings.path must be a non-empty string")
    return JsonlLogSink(Path(path))


@adapter(kind="memory")
def log_memory(settings: dict[str, object]) -> MemoryLogSink:
    _ = settings
    return MemoryLogSink()
