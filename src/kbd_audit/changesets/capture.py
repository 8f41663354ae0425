"""Turn captured bindings grouped by qualifier into immutable change-sets."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional

from kbd_audit.runtime.telemetry import span

from .errors import MalformedCaptureError, UnsupportedCaptureError
from .models import Binding, CaptureRecord, ChangeSet, Qualifier, validated_parameters


def coerce_parameters(parameters: Optional[Mapping[Any, Any]]) -> Dict[str, str]:
    """Validate a raw capture parameter map; see ``validated_parameters``."""

    return validated_parameters(parameters)


def binding_from_capture(qualifier: Qualifier, record: CaptureRecord) -> Binding:
    if not record.trigger_sequence:
        raise MalformedCaptureError(qualifier, "trigger sequence is empty")
    if not record.command_id:
        raise UnsupportedCaptureError(qualifier, record.trigger_sequence)
    return Binding(
        key_sequence=record.trigger_sequence,
        command_id=record.command_id,
        parameters=coerce_parameters(record.parameters),
    )


def build_change_sets(
    captured_by_qualifier: Mapping[Qualifier, Iterable[CaptureRecord]],
    *,
    logger_name: str | None = None,
) -> Dict[Qualifier, ChangeSet]:
    """Build one ``ADD`` change-set per qualifier, keeping input order.

    Any record without a command aborts the whole build with
    ``UnsupportedCaptureError``; nothing is returned in that case.
    """

    with span(
        "changesets::build",
        logger_name=logger_name,
        component="changesets",
        metadata={"qualifiers": len(captured_by_qualifier)},
    ) as handle:
        result: Dict[Qualifier, ChangeSet] = {}
        binding_count = 0
        for qualifier, records in captured_by_qualifier.items():
            bindings = tuple(
                binding_from_capture(qualifier, record) for record in records
            )
            binding_count += len(bindings)
            result[qualifier] = ChangeSet.for_qualifier(qualifier, bindings)
        handle.add_metadata("bindings", binding_count)
        return result


__all__ = [
    "build_change_sets",
    "binding_from_capture",
    "coerce_parameters",
]
