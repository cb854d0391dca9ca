from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from header_lines.adapters.contracts import get_adapter_meta
from header_lines.observability.logging import (
    JsonlLogSink,
    LogMessage,
    MemoryLogSink,
    log_jsonl,
    log_memory,
    log_stdout,
)


def _message() -> LogMessage:
    return LogMessage(
        level="warning",
        message="terminator write suppressed during unwind",
        timestamp=datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC),
        fields={"scope": "line"},
    )


def test_log_message_requires_level_and_message() -> None:
    with pytest.raises(ValueError, match="level must be one of"):
        LogMessage(level="", message="x")
    with pytest.raises(ValueError, match="level must be one of"):
        LogMessage(level="fatal", message="x")
    with pytest.raises(ValueError):
        LogMessage(level="info", message="")


def test_stdout_sink_prints_compact_json(capsys: pytest.CaptureFixture[str]) -> None:
    log_stdout({}).emit(_message())
    record = json.loads(capsys.readouterr().out)
    assert record == {
        "level": "warning",
        "message": "terminator write suppressed during unwind",
        "timestamp": "2026-01-02T03:04:05Z",
        "fields": {"scope": "line"},
    }


def test_jsonl_sink_appends_records(tmp_path: Path) -> None:
    path = tmp_path / "logs" / "header.jsonl"
    sink = log_jsonl({"path": str(path)})
    assert isinstance(sink, JsonlLogSink)
    sink.emit(_message())
    sink.emit(_message())
    sink.close()
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert json.loads(lines[0])["fields"] == {"scope": "line"}


def test_log_jsonl_requires_path_setting() -> None:
    with pytest.raises(ValueError):
        log_jsonl({})


def test_memory_sink_keeps_records() -> None:
    sink = log_memory({})
    assert isinstance(sink, MemoryLogSink)
    sink.emit(_message())
    assert [record.level for record in sink.records] == ["warning"]


def test_log_adapters_declare_kinds() -> None:
    kinds = [get_adapter_meta(factory).kind for factory in (log_stdout, log_jsonl, log_memory)]  # type: ignore[union-attr]
    assert kinds == ["stdout", "jsonl", "memory"]
    meta = get_adapter_meta(log_stdout)
    assert meta is not None
    assert meta.name == "log_stdout"


def test_to_json_renders_non_serializable_fields_with_repr() -> None:
    message = LogMessage(level="warning", message="suppressed", fields={"error": OSError("disk full")})
    assert json.loads(message.to_json())["fields"] == {"error": "OSError('disk full')"}


def test_jsonl_sink_rejects_emit_after_close_and_closes_once(tmp_path: Path) -> None:
    sink = JsonlLogSink(tmp_path / "header.jsonl")
    sink.close()
    sink.close()
    with pytest.raises(ValueError, match="is closed"):
        sink.emit(_message())
