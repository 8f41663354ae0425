"""Errors raised while building, encoding, or writing change-sets."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Qualifier


class ChangeSetError(RuntimeError):
    """Base class for every change-set failure."""


class UnsupportedCaptureError(ChangeSetError):
    """Raised when a captured binding has no command (i.e. it is a removal).

    Removals are not supported yet; dropping them would produce an incomplete
    audit, so the whole build fails instead.
    """

    def __init__(self, qualifier: "Qualifier", trigger_sequence: str) -> None:
        super().__init__(
            f"Binding '{trigger_sequence}' in {qualifier} has no command; "
            "removals are not supported"
        )
        self.qualifier = qualifier
        self.trigger_sequence = trigger_sequence


class MalformedCaptureError(ChangeSetError):
    """Raised when a captured binding is missing its trigger sequence."""

    def __init__(self, qualifier: "Qualifier", reason: str) -> None:
        super().__init__(f"Captured binding in {qualifier} is malformed: {reason}")
        self.qualifier = qualifier


class UnsupportedActionError(ChangeSetError, NotImplementedError):
    """Raised for change-set actions that cannot be produced yet (``remove``)."""

    def __init__(self, action: str) -> None:
        super().__init__(f"'{action}' change-sets are not supported")
        self.action = action


class ParameterCoercionError(ChangeSetError):
    """Raised when a command parameter map is not string-keyed/string-valued."""

    def __init__(self, message: str, *, key: object = None, value: object = None):
        super().__init__(message)
        self.key = key
        self.value = value


class ParameterEncodingError(ChangeSetError):
    """Raised when the parameter encoding is not available at runtime."""

    def __init__(self, encoding: str) -> None:
        super().__init__(f"Encoding '{encoding}' is not available")
        self.encoding = encoding


class SinkWriteError(ChangeSetError):
    """Raised by sinks when a rendered document cannot be persisted."""

    def __init__(self, label: str, location: str, reason: str) -> None:
        super().__init__(f"Could not write {label} bindings to '{location}': {reason}")
        self.label = label
        self.location = location


__all__ = [
    "ChangeSetError",
    "UnsupportedCaptureError",
    "MalformedCaptureError",
    "UnsupportedActionError",
    "ParameterCoercionError",
    "ParameterEncodingError",
    "SinkWriteError",
]
