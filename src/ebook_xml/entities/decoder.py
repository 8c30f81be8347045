"""Character and numeric entity reference decoding.

Named references are resolved through the HTML5 named character reference
list shipped with the standard library. The lookup table keeps the
delimiters in its keys (``"&amp;"`` rather than ``"amp"``) so a reference
can be resolved with one dictionary probe on the raw span.

Decoding is a single left-to-right pass and is deliberately not idempotent:
decoding ``"&amp;lt;"`` yields ``"&lt;"``, and decoding that again yields
``"<"``.
"""

import html.entities
import re
import threading
from types import MappingProxyType
from typing import Mapping, Optional

_MAX_CODE_POINT = 0x10FFFF
_SURROGATE_START = 0xD800
_SURROGATE_END = 0xDFFF
# Longer digit runs cannot name a code point in either base
_MAX_SIGNIFICANT_DIGITS = 8

_DECIMAL_DIGITS = re.compile(r"\+?[0-9]+")
_HEX_DIGITS = re.compile(r"\+?[0-9A-Fa-f]+")

_table: Optional[Mapping[str, str]] = None
_table_lock = threading.Lock()


def _build_entity_table() -> Mapping[str, str]:
    table = {
        "&" + name: expansion
        for name, expansion in html.entities.html5.items()
        if name.endswith(";")
    }
    return MappingProxyType(table)


def entity_table() -> Mapping[str, str]:
    """Return the process-wide, read-only ``"&name;"`` to text mapping.

    The table is built on first use; later calls return the same object.
    """
    global _table
    table = _table
    if table is None:
        with _table_lock:
            if _table is None:
                _table = _build_entity_table()
            table = _table
    return table


def _decode_numeric(reference: str) -> Optional[str]:
    """Resolve ``&#NNN;`` or ``&#xHHH;``; None if the reference is invalid."""
    if reference.startswith("&#x"):
        digits, base, pattern = reference[3:-1], 16, _HEX_DIGITS
    else:
        digits, base, pattern = reference[2:-1], 10, _DECIMAL_DIGITS

    if not pattern.fullmatch(digits):
        return None
    significant = digits.lstrip("+").lstrip("0") or "0"
    if len(significant) > _MAX_SIGNIFICANT_DIGITS:
        return None
    value = int(significant, base)
    if value > _MAX_CODE_POINT:
        return None
    if _SURROGATE_START <= value <= _SURROGATE_END:
        return None
    return chr(value)


def decode_entities(text: str) -> str:
    """Expand entity and numeric character references in ``text``.

    Text without any ``&`` is returned as the very same object. Unknown or
    malformed references are copied through literally, and an ``&`` with no
    later ``;`` leaves the rest of the text untouched. The span examined for
    each reference runs from the ``&`` to the next ``;``, even across other
    ``&`` characters.

    Examples:
        >>> decode_entities("a &lt; b &gt; c")
        'a < b > c'
        >>> decode_entities("a &#x003E; b")
        'a > b'
        >>> decode_entities("a &zZz; b")
        'a &zZz; b'
    """
    start = text.find("&")
    if start < 0:
        return text

    table = entity_table()
    parts = []
    position = 0
    while start >= 0:
        parts.append(text[position:start])
        end = text.find(";", start)
        if end < 0:
            position = start
            break

        reference = text[start:end + 1]
        replacement = table.get(reference)
        if replacement is None and reference.startswith("&#"):
            replacement = _decode_numeric(reference)
        parts.append(reference if replacement is None else replacement)

        position = end + 1
        start = text.find("&", position)

    parts.append(text[position:])
    return "".join(parts)
