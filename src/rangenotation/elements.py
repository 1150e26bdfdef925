"""Element type tokens for values Python represents with a wider type.

``int`` is already arbitrary precision and ``str`` has no separate character
type, so the fixed-width and single-character variants are ``NewType``
tokens. They act as registry keys; parsed values are plain ``int``,
``float``, ``str`` and ``datetime`` objects.
"""

from datetime import datetime
from typing import Any, NewType

Int8 = NewType("Int8", int)
Int16 = NewType("Int16", int)
Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)
Float32 = NewType("Float32", float)
Char = NewType("Char", str)
# Timezone-aware timestamp, e.g. 2024-01-01T00:00:00Z.
Instant = NewType("Instant", datetime)

INT_BOUNDS: dict[Any, tuple[int, int]] = {
    Int8: (-(1 << 7), (1 << 7) - 1),
    Int16: (-(1 << 15), (1 << 15) - 1),
    Int32: (-(1 << 31), (1 << 31) - 1),
    Int64: (-(1 << 63), (1 << 63) - 1),
}
FLOAT32_MAX = 3.4028234663852886e38


def type_name(element_type: Any) -> str:
    """Short display name for a registry key (``int``, ``Int32``, ...)."""
    name = getattr(element_type, "__qualname__", None)
    if isinstance(name, str):
        return name
    name = getattr(element_type, "__name__", None)
    if isinstance(name, str):
        return name
    return repr(element_type)
