"""Render change-sets into the hand-editable ``.kbd`` text format.

The output is deliberately not produced by a JSON encoder: it is meant to be
read, diffed and edited by a person, so quoting, indentation and field order
are fixed here by hand.

    {
      'metadata' : {
        'description' : 'Put a long description here',
        'type' : 'LASTMOD'
      },
      'changeSets' : [
        {
          'scheme' : '...',
          'platform' : '...',
          'context' : '...',
          'action' : 'add',
          'bindings' : [
            {'keys' : '...', 'command' : '...', 'commandParameters' : {'k' : 'v'}},
          ]
        },
      ]
    }

Every binding and change-set entry ends with a comma, the last one included.
Existing ``.kbd`` files carry that layout, so it is kept.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping

from kbd_audit.changesets import fields
from kbd_audit.changesets.models import Binding, ChangeSet, Document, Qualifier
from kbd_audit.runtime.telemetry import span

from .encoding import url_encode

INDENT = "  "


class BindingType(str, Enum):
    """Which captured binding set a document holds; also its output label."""

    USER = "USER"
    SYSTEM = "SYSTEM"


def _indent(depth: int) -> str:
    return INDENT * depth


def _quote(value: str) -> str:
    return f"'{value}'"


def _pair(key: str, value: str) -> str:
    return f"{_quote(key)} : {_quote(value)}"


def _format_parameters(parameters: Mapping[str, str]) -> str:
    pairs = (
        _pair(url_encode(key), url_encode(parameters[key]))
        for key in sorted(parameters)
    )
    return "{" + ", ".join(pairs) + "}"


def format_binding(binding: Binding) -> str:
    """Single-line ``{...}`` entry for one binding, without indent or comma."""

    parts = [
        _pair(fields.KEYS, binding.key_sequence),
        _pair(fields.COMMAND, binding.command_id),
    ]
    if binding.parameters:
        parts.append(
            f"{_quote(fields.COMMAND_PARAMETERS)} : "
            f"{_format_parameters(binding.parameters)}"
        )
    return "{" + ", ".join(parts) + "}"


def _change_set_lines(change_set: ChangeSet) -> list[str]:
    lines = [_indent(2) + "{"]
    lines.append(_indent(3) + _pair(fields.SCHEME, change_set.scheme) + ",")
    if change_set.platform is not None:
        lines.append(_indent(3) + _pair(fields.PLATFORM, change_set.platform) + ",")
    lines.append(_indent(3) + _pair(fields.CONTEXT, change_set.context) + ",")
    lines.append(_indent(3) + _pair(fields.ACTION, change_set.action.value) + ",")
    lines.append(_indent(3) + f"{_quote(fields.BINDINGS)} : [")
    for binding in change_set.bindings:
        lines.append(_indent(4) + format_binding(binding) + ",")
    lines.append(_indent(3) + "]")
    lines.append(_indent(2) + "},")
    return lines


def render_document(document: Document) -> str:
    """Render ``document`` to text. Equal documents give identical text."""

    lines = [
        "{",
        _indent(1) + f"{_quote(fields.METADATA)} : {{",
        _indent(2) + _pair(fields.DESCRIPTION, document.description) + ",",
        _indent(2) + _pair(fields.TYPE, document.type),
        _indent(1) + "},",
        _indent(1) + f"{_quote(fields.CHANGE_SETS)} : [",
    ]
    for change_set in document.change_sets:
        lines.extend(_change_set_lines(change_set))
    lines.append(_indent(1) + "]")
    lines.append("}")
    return "\n".join(lines)


def render(
    binding_type: BindingType,
    change_sets: Mapping[Qualifier, ChangeSet],
    *,
    logger_name: str | None = None,
) -> str:
    """Render ``change_sets`` in the mapping's iteration order."""

    with span(
        "formatter::render",
        logger_name=logger_name,
        component="formatter",
        metadata={
            "binding_type": BindingType(binding_type).value,
            "change_sets": len(change_sets),
        },
    ):
        return render_document(Document.from_mapping(change_sets))


__all__ = [
    "BindingType",
    "INDENT",
    "format_binding",
    "render",
    "render_document",
]
