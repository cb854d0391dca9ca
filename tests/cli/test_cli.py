from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace

import pytest

from header_lines.adapters import AdapterRegistry, AdapterRegistryError, BufferByteSink, file_sink, memory_sink
from header_lines.app.cli import apply_output_override, build_registry, parse_args, run
from header_lines.config.models import AppConfig
from header_lines.main import main
from header_lines.observability.logging import MemoryLogSink

_CONFIG = """
version: 1
response:
  status_line: HTTP/1.1 200 OK
  headers:
    - [Host, iana.org]
  body: hello
output:
  kind: file
  settings:
    path: {path}
logging:
  kind: jsonl
  settings:
    path: {log_path}
"""


def _write_config(tmp_path: Path) -> tuple[Path, Path, Path]:
    out_path = tmp_path / "out.http"
    log_path = tmp_path / "log.jsonl"
    config_path = tmp_path / "cfg.yml"
    config_path.write_text(_CONFIG.format(path=out_path, log_path=log_path), encoding="utf-8")
    return config_path, out_path, log_path


def test_parse_args_reads_flags() -> None:
    args = parse_args(["--config", "cfg.yml", "--output", "out.http"])
    assert args.config == "cfg.yml"
    assert args.output == "out.http"


def test_apply_output_override_forces_file_sink() -> None:
    config = AppConfig.model_validate(
        {"response": {"status_line": "HTTP/1.1 200 OK"}, "output": {"kind": "memory", "settings": {"capacity": 1}}}
    )
    apply_output_override(config, SimpleNamespace(output="override.http"))
    assert config.output.kind == "file"
    assert config.output.settings == {"path": "override.http"}


def test_apply_output_override_keeps_file_settings() -> None:
    config = AppConfig.model_validate(
        {
            "response": {"status_line": "HTTP/1.1 200 OK"},
            "output": {"kind": "file", "settings": {"path": "a.http", "atomic_replace": True}},
        }
    )
    apply_output_override(config, SimpleNamespace(output="b.http"))
    assert config.output.settings == {"path": "b.http", "atomic_replace": True}
    apply_output_override(config, SimpleNamespace(output=None))
    assert config.output.settings["path"] == "b.http"


def test_run_writes_response_and_log(tmp_path: Path) -> None:
    config_path, out_path, log_path = _write_config(tmp_path)
    assert run(["--config", str(config_path)]) == 0
    assert out_path.read_bytes() == b"HTTP/1.1 200 OK\r\nHost: iana.org\r\n\r\nhello"
    records = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert [record["message"] for record in records] == ["response written"]
    assert records[0]["fields"] == {"sink": "file", "header_lines": 2}


def test_run_honors_output_override(tmp_path: Path) -> None:
    config_path, out_path, _ = _write_config(tmp_path)
    override = tmp_path / "override.http"
    assert main(["--config", str(config_path), "--output", str(override)]) == 0
    assert not out_path.exists()
    assert override.read_bytes().endswith(b"\r\n\r\nhello")


def test_run_with_injected_registry_and_memory_sink(tmp_path: Path) -> None:
    config_path = tmp_path / "cfg.yml"
    config_path.write_text(
        "response:\n  status_line: HTTP/1.1 304 Not Modified\noutput: {kind: memory}\nlogging: {kind: memory}\n",
        encoding="utf-8",
    )
    sink = BufferByteSink()
    logs = MemoryLogSink()
    registry = AdapterRegistry()
    registry.register("output", "memory", lambda settings: sink)
    registry.register("logging", "memory", lambda settings: logs)
    assert run(["--config", str(config_path)], registry=registry) == 0
    assert sink.getvalue() == b"HTTP/1.1 304 Not Modified\r\n\r\n"
    assert logs.records[0].fields["header_lines"] == 1


def test_default_registry_knows_sink_and_log_kinds() -> None:
    registry = build_registry()
    assert registry.kinds("output") == ["file", "memory"]
    assert registry.kinds("logging") == ["jsonl", "memory", "stdout"]


def test_run_reports_missing_config(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        run(["--config", str(tmp_path / "missing.yml")])


def test_failed_run_does_not_commit_atomic_output(tmp_path: Path) -> None:
    out_path = tmp_path / "out.http"
    config_path = tmp_path / "cfg.yml"
    config_path.write_text(
        "response:\n"
        "  status_line: HTTP/1.1 200 OK\n"
        "  encoding: ascii\n"
        "  headers:\n"
        "    - [X-Name, café]\n"
        "output:\n"
        "  kind: file\n"
        f"  settings: {{path: {out_path}, atomic_replace: true}}\n"
        "logging: {kind: memory}\n",
        encoding="utf-8",
    )
    with pytest.raises(UnicodeEncodeError):
        run(["--config", str(config_path)])
    assert not out_path.exists()
    assert not (tmp_path / "out.http.tmp").exists()


def test_bad_output_config_still_closes_log_sink(tmp_path: Path) -> None:
    class _TrackingLogSink(MemoryLogSink):
        closed = False

        def close(self) -> None:
            self.closed = True

    config_path = tmp_path / "cfg.yml"
    config_path.write_text(
        "response: {status_line: HTTP/1.1 200 OK}\noutput: {kind: socket}\nlogging: {kind: memory}\n",
        encoding="utf-8",
    )
    logs = _TrackingLogSink()
    registry = AdapterRegistry()
    registry.register_all("output", [file_sink, memory_sink])
    registry.register("logging", "memory", lambda settings: logs)
    with pytest.raises(AdapterRegistryError, match="socket"):
        run(["--config", str(config_path)], registry=registry)
    assert logs.closed
