from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

from header_lines.adapters import AdapterRegistry, file_sink, memory_sink
from header_lines.config.loader import load_config
from header_lines.config.models import AppConfig
from header_lines.observability.logging import LogMessage, log_jsonl, log_memory, log_stdout
from header_lines.response import write_response


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render an HTTP response header and body into a sink")
    parser.add_argument("--config", required=True, help="Path to YAML config")
    parser.add_argument("--output", help="Override output file path (forces the file sink)")
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Caller passes argv for testability.
    return build_parser().parse_args(argv)


def build_registry() -> AdapterRegistry:
    registry = AdapterRegistry()
    registry.register_all("output", [file_sink, memory_sink])
    registry.register_all("logging", [log_stdout, log_jsonl, log_memory])
    return registry


def apply_output_override(config: AppConfig, args: argparse.Namespace) -> None:
    # CLI --output wins over the configured sink.
    if args.output is None:
        return
    settings = dict(config.output.settings) if config.output.kind == "file" else {}
    settings["path"] = args.output
    config.output.kind = "file"
    config.output.settings = settings


def run(argv: Sequence[str] | None = None, registry: AdapterRegistry | None = None) -> int:
    args = parse_args(argv)
    config = load_config(Path(args.config))
    apply_output_override(config, args)

    registry = registry or build_registry()
    log_sink = registry.build("logging", config.logging.model_dump())
    response = config.response
    try:
        sink = registry.build("output", config.output.model_dump())
        try:
            write_response(
                sink,  # type: ignore[arg-type]
                response.status_line,
                response.headers,
                response.body.encode(response.encoding),
                encoding=response.encoding,
                log_sink=log_sink,  # type: ignore[arg-type]
            )
        except Exception:
            _abandon(sink)
            raise
        sink.close()  # type: ignore[attr-defined]
        log_sink.emit(  # type: ignore[attr-defined]
            LogMessage(
                level="info",
                message="response written",
                fields={"sink": config.output.kind, "header_lines": len(response.headers) + 1},
            )
        )
    finally:
        log_sink.close()  # type: ignore[attr-defined]
    return 0


def _abandon(sink: object) -> None:
    # Sinks that can roll back (atomic file replace) drop partial output; others are just closed.
    # Runs while the write failure propagates, so its own failure is dropped.
    discard = getattr(sink, "discard", None)
    try:
        if discard is not None:
            discard()
        else:
            sink.close()  # type: ignore[attr-defined]
    except Exception:
        pass
