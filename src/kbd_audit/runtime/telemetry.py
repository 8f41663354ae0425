"""telelog-backed logging for change-set builds, renders and dumps.

``get_logger(name)`` -- cached logger configured from ``KBD_AUDIT_*`` variables
``record_event(name, ...)`` -- structured ``event::<name>`` entry
``span(name, ...)`` -- profiles a block; failures are logged and re-raised
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "KBD_AUDIT_"
DEFAULT_LOGGER_NAME = "kbd_audit"

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_CONFIG: Optional[Any] = None


def _env_flag(name: str) -> bool:
    return os.getenv(f"{ENV_PREFIX}{name}", "").lower() in {"1", "true", "yes", "on"}


def _payload(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), str(value)) for key, value in data.items()]


def _config() -> Any:
    """Logging setup read once from the environment.

    ``LOG_LEVEL`` sets the minimum level (default ``INFO``), ``LOG_FILE`` adds a
    file target, ``QUIET`` turns console output off.
    """

    global _CONFIG
    if _CONFIG is None:
        config = tl.Config()
        config.with_min_level(os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper())
        config.with_console_output(not _env_flag("QUIET"))
        log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
        if log_file:
            config.with_file_output(log_file)
        config.with_profiling(True)
        _CONFIG = config
    return _CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return the cached ``telelog.Logger`` for ``name``."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _config())
    return _LOGGER_CACHE[logger_name]


def _emit(log: Any, level: str, message: str, data: Dict[str, Any]) -> None:
    with_data = getattr(log, f"{level}_with", None)
    if with_data is not None:
        with_data(message, _payload(data))
    else:
        getattr(log, level)(f"{message} {data}")


def record_event(
    name: str,
    *,
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(get_logger(logger_name), "info", f"event::{name}", data or {})


@dataclass
class SpanHandle:
    """Collects metadata reported when the span fails."""

    logger: Any
    span_name: str
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = str(value)

    def fail(self, reason: str) -> None:
        _emit(
            self.logger,
            "error",
            "span::fail",
            {"span": self.span_name, **self.metadata, "reason": reason},
        )


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``, tracked as ``component`` when given.

    ``metadata`` is attached as logger context for the duration of the block.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(logger=log, span_name=name)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)
        log.add_context(key, handle.metadata[key])

    with ExitStack() as stack:
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in metadata or {}:
                log.remove_context(key)


__all__ = [
    "ENV_PREFIX",
    "SpanHandle",
    "get_logger",
    "record_event",
    "span",
]
