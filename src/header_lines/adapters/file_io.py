from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from header_lines.adapters.contracts import adapter


@dataclass
class FileByteSink:
    # File-backed ByteSink: binary mode, opened on first write, optionally committed atomically on close.
    path: Path
    atomic_replace: bool = False
    _handle: BinaryIO | None = field(default=None, init=False, repr=False)
    _temp_path: Path | None = field(default=None, init=False, repr=False)

    def write(self, data: bytes) -> int:
        # Open lazily so construction does not touch filesystem.
        if self._handle is None:
            self._open()
        assert self._handle is not None
        return self._handle.write(data)

    def flush(self) -> None:
        if self._handle is not None:
            self._handle.flush()

    def close(self) -> None:
        # Close is idempotent; safe to call multiple times.
        if self._handle is None:
            return
        self._handle.flush()
        self._handle.close()
        self._handle = None

        if self.atomic_replace and self._temp_path is not None:
            # Atomic replace commits the temp file to the final path.
            self._temp_path.replace(self.path)
            self._temp_path = None

    def discard(self) -> None:
        # Failed write: release the handle without committing; an uncommitted temp file is removed.
        if self._handle is None:
            return
        self._handle.close()
        self._handle = None
        if self._temp_path is not None:
            self._temp_path.unlink(missing_ok=True)
            self._temp_path = None

    def _open(self) -> None:
        if self.atomic_replace:
            self._temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            self._handle = self._temp_path.open("wb")
        else:
            self._handle = self.path.open("wb")


@adapter(kind="file")
def file_sink(settings: dict[str, object]) -> FileByteSink:
    path = settings.get("path")
    if not isinstance(path, str) or not path:
        raise ValueError("file_sink.settings.path must be a non-empty string")
    return FileByteSink(
        path=Path(path),
        atomic_replace=bool(settings.get("atomic_replace", False)),
    )
