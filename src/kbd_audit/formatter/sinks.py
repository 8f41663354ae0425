"""Destinations for rendered ``.kbd`` documents."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Protocol

from kbd_audit.changesets import fields
from kbd_audit.changesets.errors import SinkWriteError

TEMP_DIR_NAME = "workspace-mechanic-kbd"
FILE_PREFIX = "CURRENT-"


class DocumentSink(Protocol):
    """Persists one rendered document under a label such as ``USER``."""

    def write(self, label: str, document: str) -> str:
        """Store ``document`` and return a human-readable location."""
        ...


class FileSink:
    """Writes ``CURRENT-<label>.kbd`` files into a single directory."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    @classmethod
    def in_temp_dir(cls, name: str = TEMP_DIR_NAME) -> "FileSink":
        directory = Path(tempfile.gettempdir()) / name
        directory.mkdir(exist_ok=True)
        return cls(directory)

    def path_for(self, label: str) -> Path:
        return self.directory / f"{FILE_PREFIX}{label}{fields.FILE_EXTENSION}"

    def write(self, label: str, document: str) -> str:
        path = self.path_for(label)
        try:
            path.write_text(document, encoding="utf-8")
        except OSError as exc:
            raise SinkWriteError(label, str(path), str(exc)) from exc
        return str(path.resolve())


__all__ = ["DocumentSink", "FileSink", "TEMP_DIR_NAME", "FILE_PREFIX"]
