"""Dataclasses describing keybinding change-sets and their capture records."""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Protocol

from . import fields
from .errors import ParameterCoercionError, UnsupportedActionError


def validated_parameters(parameters: Optional[Mapping[Any, Any]]) -> Dict[str, str]:
    """Return ``parameters`` as a new ``dict[str, str]``.

    ``None`` becomes an empty dict. Non-string keys or values are rejected
    rather than cast.
    """

    if parameters is None:
        return {}
    if not isinstance(parameters, MappingABC):
        raise ParameterCoercionError(
            f"command parameters must be a mapping, got {type(parameters).__name__}"
        )

    result: Dict[str, str] = {}
    for key, value in parameters.items():
        if not isinstance(key, str):
            raise ParameterCoercionError(
                f"parameter key {key!r} is not a string", key=key, value=value
            )
        if not isinstance(value, str):
            raise ParameterCoercionError(
                f"parameter '{key}' has non-string value {value!r}",
                key=key,
                value=value,
            )
        result[key] = value
    return result


class Action(str, Enum):
    """What a change-set does to its bindings."""

    ADD = fields.ADD
    REMOVE = fields.REMOVE


@dataclass(frozen=True, slots=True)
class Qualifier:
    """Scheme/platform/context triple a change-set applies to.

    ``platform`` is ``None`` when the bindings apply to every platform.
    """

    scheme: str
    platform: Optional[str]
    context: str

    def __post_init__(self) -> None:
        if not self.scheme:
            raise ValueError("qualifier scheme cannot be empty")
        if not self.context:
            raise ValueError("qualifier context cannot be empty")


@dataclass(frozen=True, slots=True)
class Binding:
    """One trigger sequence mapped to a command and its raw parameters."""

    key_sequence: str
    command_id: str
    parameters: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.key_sequence:
            raise ValueError("binding key_sequence cannot be empty")
        if not self.command_id:
            raise ValueError("binding command_id cannot be empty")
        object.__setattr__(
            self, "parameters", MappingProxyType(validated_parameters(self.parameters))
        )


@dataclass(frozen=True, slots=True)
class ChangeSet:
    """All bindings of a single qualifier, in capture order."""

    scheme: str
    platform: Optional[str]
    context: str
    action: Action = Action.ADD
    bindings: tuple[Binding, ...] = ()

    def __post_init__(self) -> None:
        action = Action(self.action)
        if action is Action.REMOVE:
            raise UnsupportedActionError(action.value)
        object.__setattr__(self, "action", action)
        object.__setattr__(self, "bindings", tuple(self.bindings))

    @property
    def qualifier(self) -> Qualifier:
        return Qualifier(self.scheme, self.platform, self.context)

    @classmethod
    def for_qualifier(
        cls, qualifier: Qualifier, bindings: Iterable[Binding]
    ) -> "ChangeSet":
        return cls(
            scheme=qualifier.scheme,
            platform=qualifier.platform,
            context=qualifier.context,
            action=Action.ADD,
            bindings=tuple(bindings),
        )


@dataclass(frozen=True, slots=True)
class Document:
    """Top-level ``.kbd`` document: metadata plus ordered change-sets."""

    change_sets: tuple[ChangeSet, ...] = ()
    description: str = fields.DEFAULT_DESCRIPTION
    type: str = fields.LASTMOD

    def __post_init__(self) -> None:
        change_sets = tuple(self.change_sets)
        seen: set[Qualifier] = set()
        for change_set in change_sets:
            qualifier = change_set.qualifier
            if qualifier in seen:
                raise ValueError(f"duplicate change-set for {qualifier}")
            seen.add(qualifier)
        object.__setattr__(self, "change_sets", change_sets)

    @classmethod
    def from_mapping(cls, change_sets: Mapping[Qualifier, ChangeSet]) -> "Document":
        for qualifier, change_set in change_sets.items():
            if qualifier != change_set.qualifier:
                raise ValueError(
                    f"change-set keyed by {qualifier} belongs to {change_set.qualifier}"
                )
        return cls(change_sets=tuple(change_sets.values()))


class CaptureRecord(Protocol):
    """Environment-native binding as handed over by the capture source."""

    trigger_sequence: str
    command_id: Optional[str]
    parameters: Optional[Mapping[Any, Any]]


@dataclass(frozen=True, slots=True)
class CapturedBinding:
    """Plain ``CaptureRecord`` implementation used by capture sources and tests."""

    trigger_sequence: str
    command_id: Optional[str] = None
    parameters: Optional[Mapping[Any, Any]] = None


__all__ = [
    "Action",
    "Qualifier",
    "Binding",
    "ChangeSet",
    "Document",
    "CaptureRecord",
    "CapturedBinding",
    "validated_parameters",
]
