"""Write USER (and optionally SYSTEM) change-set documents through a sink."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional, Protocol

from kbd_audit.changesets.capture import build_change_sets
from kbd_audit.changesets.models import CaptureRecord, ChangeSet, Qualifier
from kbd_audit.config import DumpConfig
from kbd_audit.runtime import telemetry

from .render import BindingType, render
from .sinks import DocumentSink, FileSink

DUMP_LOGGER_NAME = "kbd_audit.dump"

ChangeSetMap = Mapping[Qualifier, ChangeSet]


class DumpLog(Protocol):
    """Receives the outcome of each write; telelog loggers fit as-is."""

    def info(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...


@dataclass(slots=True)
class DumpReport:
    """Labels written, failed, or skipped by a single ``dump_all`` call."""

    written: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


class ChangeSetDumper:
    """Renders captured change-sets and hands them to a sink.

    The SYSTEM document is only produced when ``config.debug_dump_system`` is
    set. Each document is written independently: a failed write is logged and
    does not stop the other one.
    """

    def __init__(
        self,
        user_change_sets: ChangeSetMap,
        system_change_sets: ChangeSetMap,
        *,
        sink: DocumentSink | None = None,
        config: DumpConfig | None = None,
        log: DumpLog | None = None,
        logger_name: str | None = None,
    ) -> None:
        self.config = config or DumpConfig()
        self.user_change_sets = user_change_sets
        self.system_change_sets = system_change_sets
        self.sink = sink or _default_sink(self.config)
        self.log = log or telemetry.get_logger(DUMP_LOGGER_NAME)
        self._logger_name = logger_name

    @classmethod
    def from_captures(
        cls,
        user_captures: Mapping[Qualifier, Iterable[CaptureRecord]],
        system_captures: Mapping[Qualifier, Iterable[CaptureRecord]],
        *,
        sink: DocumentSink | None = None,
        config: DumpConfig | None = None,
        log: DumpLog | None = None,
        logger_name: str | None = None,
    ) -> "ChangeSetDumper":
        """Build change-sets from raw captures, then wrap them in a dumper.

        Capture errors propagate from here, before any sink is touched.
        """

        user = build_change_sets(user_captures, logger_name=logger_name)
        system = build_change_sets(system_captures, logger_name=logger_name)
        return cls(
            user,
            system,
            sink=sink,
            config=config,
            log=log,
            logger_name=logger_name,
        )

    def dump_all(self) -> DumpReport:
        report = DumpReport()
        if self.config.debug_dump_system:
            self._record(report, BindingType.SYSTEM, self.system_change_sets)
        else:
            report.skipped.append(BindingType.SYSTEM.value)
        self._record(report, BindingType.USER, self.user_change_sets)
        telemetry.record_event(
            "dump.completed",
            data={
                "written": ",".join(report.written),
                "failed": ",".join(report.failed),
            },
            logger_name=self._logger_name,
        )
        return report

    def dump(self, binding_type: BindingType, change_sets: ChangeSetMap) -> bool:
        """Render and write one document; ``False`` if the sink failed."""

        label = BindingType(binding_type).value
        document = render(binding_type, change_sets, logger_name=self._logger_name)
        try:
            location = self.sink.write(label, document)
        except Exception as exc:
            self.log.error(f"Failed to write {label} bindings: {exc}")
            return False
        self.log.info(f"Successfully wrote '{location}'")
        return True

    def _record(
        self, report: DumpReport, binding_type: BindingType, change_sets: ChangeSetMap
    ) -> None:
        if self.dump(binding_type, change_sets):
            report.written.append(binding_type.value)
        else:
            report.failed.append(binding_type.value)


def _default_sink(config: DumpConfig) -> FileSink:
    if config.output_dir is not None:
        return FileSink(config.output_dir)
    return FileSink.in_temp_dir()


def dump_all(
    user_change_sets: ChangeSetMap,
    system_change_sets: ChangeSetMap,
    debug_dump_system: bool,
    *,
    sink: DocumentSink,
    log: Optional[DumpLog] = None,
) -> DumpReport:
    """One-shot form of ``ChangeSetDumper(...).dump_all()``."""

    dumper = ChangeSetDumper(
        user_change_sets,
        system_change_sets,
        sink=sink,
        config=DumpConfig(debug_dump_system=debug_dump_system),
        log=log,
    )
    return dumper.dump_all()


__all__ = [
    "ChangeSetDumper",
    "DumpLog",
    "DumpReport",
    "dump_all",
]
