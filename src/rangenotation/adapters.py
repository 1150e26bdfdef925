"""Per-type conversion of endpoint text into element values."""

import math
from collections.abc import Callable
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Protocol, TypeVar

from rangenotation.durations import parse_iso_duration
from rangenotation.elements import (
    FLOAT32_MAX,
    INT_BOUNDS,
    Char,
    Float32,
    Instant,
    Int8,
    Int16,
    Int32,
    Int64,
)

T_co = TypeVar("T_co", covariant=True)


class TypeAdapter(Protocol[T_co]):
    """Converts trimmed endpoint text into a value of one element type.

    Any callable taking a ``str`` qualifies, so ``Money.parse`` or a lambda
    can be registered directly. Raise an exception (``ValueError`` by
    convention) for malformed text.
    """

    def __call__(self, value: str, /) -> T_co | None: ...


def _reject_loose_numeric_syntax(value: str, type_label: str) -> None:
    # int()/float()/Decimal() accept digit-group underscores and padding.
    if "_" in value or value != value.strip():
        raise ValueError(
            f"invalid literal for {type_label}() with base 10: {value!r}"
        )


def parse_int(value: str) -> int:
    _reject_loose_numeric_syntax(value, "int")
    return int(value)


def _bounded_int_adapter(element_type: Any) -> Callable[[str], int]:
    low, high = INT_BOUNDS[element_type]
    label = element_type.__name__

    def adapter(value: str) -> int:
        parsed = parse_int(value)
        if not low <= parsed <= high:
            raise ValueError(
                f"Value out of range for {label} [{low}, {high}]: {value}"
            )
        return parsed

    adapter.__name__ = f"parse_{label.lower()}"
    return adapter


def parse_float(value: str) -> float:
    _reject_loose_numeric_syntax(value, "float")
    parsed = float(value)
    if math.isnan(parsed):
        raise ValueError(f"NaN is not an ordered value: {value!r}")
    if math.isinf(parsed):
        raise ValueError(
            f"Infinite endpoint must use an infinity token: {value!r}"
        )
    return parsed


def parse_float32(value: str) -> float:
    parsed = parse_float(value)
    if abs(parsed) > FLOAT32_MAX:
        raise ValueError(f"Value out of range for Float32: {value}")
    return parsed


def parse_decimal(value: str) -> Decimal:
    _reject_loose_numeric_syntax(value, "Decimal")
    try:
        parsed = Decimal(value)
    except InvalidOperation as exc:
        raise ValueError(
            f"invalid literal for Decimal(): {value!r}"
        ) from exc
    if parsed.is_nan():
        raise ValueError(f"NaN is not an ordered value: {value!r}")
    if parsed.is_infinite():
        raise ValueError(
            f"Infinite endpoint must use an infinity token: {value!r}"
        )
    return parsed


def parse_str(value: str) -> str:
    return value


def parse_char(value: str) -> str:
    if len(value) != 1:
        raise ValueError(f"Expected single character but got: '{value}'")
    return value


def parse_instant(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        raise ValueError(
            f"Instant requires a UTC offset or 'Z' designator: {value!r}"
        )
    return parsed


BUILTIN_ADAPTERS: dict[Any, TypeAdapter[Any]] = {
    # Numeric
    int: parse_int,
    Int8: _bounded_int_adapter(Int8),
    Int16: _bounded_int_adapter(Int16),
    Int32: _bounded_int_adapter(Int32),
    Int64: _bounded_int_adapter(Int64),
    float: parse_float,
    Float32: parse_float32,
    Decimal: parse_decimal,
    # Temporal
    date: date.fromisoformat,
    datetime: datetime.fromisoformat,
    time: time.fromisoformat,
    timedelta: parse_iso_duration,
    Instant: parse_instant,
    # Text
    str: parse_str,
    Char: parse_char,
}
