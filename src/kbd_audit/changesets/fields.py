"""Field names and literal values of the ``.kbd`` change-set format.

The formatter writes these and the companion parser reads them, so both sides
must import them from here.
"""

from __future__ import annotations

METADATA = "metadata"
DESCRIPTION = "description"
TYPE = "type"
CHANGE_SETS = "changeSets"
SCHEME = "scheme"
PLATFORM = "platform"
CONTEXT = "context"
ACTION = "action"
BINDINGS = "bindings"
KEYS = "keys"
COMMAND = "command"
COMMAND_PARAMETERS = "commandParameters"

ADD = "add"
REMOVE = "remove"

LASTMOD = "LASTMOD"
DEFAULT_DESCRIPTION = "Put a long description here"

FILE_EXTENSION = ".kbd"

__all__ = [
    "METADATA",
    "DESCRIPTION",
    "TYPE",
    "CHANGE_SETS",
    "SCHEME",
    "PLATFORM",
    "CONTEXT",
    "ACTION",
    "BINDINGS",
    "KEYS",
    "COMMAND",
    "COMMAND_PARAMETERS",
    "ADD",
    "REMOVE",
    "LASTMOD",
    "DEFAULT_DESCRIPTION",
    "FILE_EXTENSION",
]
