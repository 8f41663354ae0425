from __future__ import annotations

import importlib
from pathlib import Path
from typing import Dict, List

import pytest

from kbd_audit.changesets import (
    Binding,
    CapturedBinding,
    ChangeSet,
    ParameterEncodingError,
    Qualifier,
    SinkWriteError,
    UnsupportedCaptureError,
)
from kbd_audit.config import DumpConfig
from kbd_audit.formatter import ChangeSetDumper, FileSink, dump_all

WINDOW = Qualifier("scheme", None, "window")
USER_SETS = {
    WINDOW: ChangeSet.for_qualifier(WINDOW, (Binding("CTRL+U", "user.cmd"),))
}
SYSTEM_SETS = {
    WINDOW: ChangeSet.for_qualifier(WINDOW, (Binding("CTRL+S", "system.cmd"),))
}


class RecordingLog:
    def __init__(self) -> None:
        self.infos: List[str] = []
        self.errors: List[str] = []

    def info(self, message: str) -> None:
        self.infos.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


class MemorySink:
    def __init__(self, failing: tuple[str, ...] = ()) -> None:
        self.documents: Dict[str, str] = {}
        self.failing = failing

    def write(self, label: str, document: str) -> str:
        if label in self.failing:
            raise OSError(f"{label} is read-only")
        self.documents[label] = document
        return f"memory://{label}"


def test_dump_all_writes_user_only_by_default() -> None:
    sink = MemorySink()
    log = RecordingLog()

    report = dump_all(USER_SETS, SYSTEM_SETS, False, sink=sink, log=log)

    assert list(sink.documents) == ["USER"]
    assert "user.cmd" in sink.documents["USER"]
    assert report.written == ["USER"]
    assert report.skipped == ["SYSTEM"]
    assert log.infos == ["Successfully wrote 'memory://USER'"]


def test_dump_all_writes_system_when_enabled() -> None:
    sink = MemorySink()

    report = dump_all(USER_SETS, SYSTEM_SETS, True, sink=sink, log=RecordingLog())

    assert list(sink.documents) == ["SYSTEM", "USER"]
    assert "system.cmd" in sink.documents["SYSTEM"]
    assert report.written == ["SYSTEM", "USER"]
    assert report.skipped == []


def test_system_failure_does_not_block_user() -> None:
    sink = MemorySink(failing=("SYSTEM",))
    log = RecordingLog()

    report = dump_all(USER_SETS, SYSTEM_SETS, True, sink=sink, log=log)

    assert list(sink.documents) == ["USER"]
    assert report.failed == ["SYSTEM"]
    assert report.written == ["USER"]
    assert len(log.errors) == 1
    assert "SYSTEM" in log.errors[0]


def test_user_failure_is_logged_not_raised() -> None:
    sink = MemorySink(failing=("USER",))
    log = RecordingLog()

    report = dump_all(USER_SETS, SYSTEM_SETS, True, sink=sink, log=log)

    assert list(sink.documents) == ["SYSTEM"]
    assert report.failed == ["USER"]
    assert log.errors


def test_dumper_uses_captured_config() -> None:
    sink = MemorySink()
    dumper = ChangeSetDumper(
        USER_SETS,
        SYSTEM_SETS,
        sink=sink,
        config=DumpConfig(debug_dump_system=True),
        log=RecordingLog(),
    )

    dumper.dump_all()

    assert set(sink.documents) == {"USER", "SYSTEM"}


def test_from_captures_builds_and_dumps() -> None:
    sink = MemorySink()
    dumper = ChangeSetDumper.from_captures(
        {WINDOW: [CapturedBinding("CTRL+U", "user.cmd", {"p": "v w"})]},
        {},
        sink=sink,
        log=RecordingLog(),
    )

    dumper.dump_all()

    assert "'commandParameters' : {'p' : 'v+w'}" in sink.documents["USER"]


def test_from_captures_removal_writes_nothing() -> None:
    sink = MemorySink()

    with pytest.raises(UnsupportedCaptureError):
        ChangeSetDumper.from_captures(
            {WINDOW: [CapturedBinding("CTRL+U", None)]},
            {},
            sink=sink,
            log=RecordingLog(),
        )

    assert sink.documents == {}


def test_file_sink_writes_named_file(tmp_path: Path) -> None:
    sink = FileSink(tmp_path)

    location = sink.write("USER", "{\n}")

    target = tmp_path / "CURRENT-USER.kbd"
    assert target.read_text(encoding="utf-8") == "{\n}"
    assert Path(location) == target.resolve()


def test_file_sink_overwrites(tmp_path: Path) -> None:
    sink = FileSink(tmp_path)

    sink.write("USER", "first")
    sink.write("USER", "second")

    assert (tmp_path / "CURRENT-USER.kbd").read_text(encoding="utf-8") == "second"


def test_file_sink_missing_directory(tmp_path: Path) -> None:
    sink = FileSink(tmp_path / "missing")

    with pytest.raises(SinkWriteError) as excinfo:
        sink.write("SYSTEM", "{}")

    assert excinfo.value.label == "SYSTEM"


def test_dumper_with_file_sink_from_config(tmp_path: Path) -> None:
    log = RecordingLog()
    dumper = ChangeSetDumper(
        USER_SETS,
        SYSTEM_SETS,
        config=DumpConfig(debug_dump_system=False, output_dir=tmp_path),
        log=log,
    )

    report = dumper.dump_all()

    assert report.written == ["USER"]
    assert (tmp_path / "CURRENT-USER.kbd").exists()
    assert not (tmp_path / "CURRENT-SYSTEM.kbd").exists()


def test_render_failure_propagates_and_writes_nothing(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def unavailable(value: str) -> str:
        raise ParameterEncodingError("US-ASCII")

    render_module = importlib.import_module("kbd_audit.formatter.render")
    monkeypatch.setattr(render_module, "url_encode", unavailable)
    with_parameters = {
        WINDOW: ChangeSet.for_qualifier(
            WINDOW, (Binding("CTRL+U", "user.cmd", {"p": "v"}),)
        )
    }
    sink = MemorySink()
    log = RecordingLog()

    with pytest.raises(ParameterEncodingError):
        dump_all(with_parameters, SYSTEM_SETS, False, sink=sink, log=log)

    assert sink.documents == {}
    assert log.errors == []
