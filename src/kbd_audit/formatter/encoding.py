"""Form-style percent-encoding for command parameter keys and values."""

from __future__ import annotations

import codecs
from urllib.parse import quote_plus

from kbd_audit.changesets.errors import ParameterEncodingError

PARAMETER_ENCODING = "US-ASCII"

# quote_plus always keeps "_.-~"; the .kbd format keeps "_.-*" and escapes "~".
_EXTRA_SAFE = "*"


def url_encode(value: str, *, encoding: str = PARAMETER_ENCODING) -> str:
    """Encode ``value`` so it is safe inside a single-quoted ``.kbd`` literal.

    Spaces become ``+``; characters outside ``encoding`` are replaced with
    ``?`` before escaping.
    """

    try:
        codecs.lookup(encoding)
    except LookupError as exc:
        raise ParameterEncodingError(encoding) from exc
    encoded = quote_plus(value, safe=_EXTRA_SAFE, encoding=encoding, errors="replace")
    return encoded.replace("~", "%7E")


__all__ = ["PARAMETER_ENCODING", "url_encode"]
