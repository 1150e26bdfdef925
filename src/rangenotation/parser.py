"""Text to ``Range`` conversion.

The notation is scanned with fixed-position checks and a single forward
substring search for the ``..`` separator; no regular expression touches
the structure, so work stays linear in the input length.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

from rangenotation.adapters import BUILTIN_ADAPTERS, TypeAdapter
from rangenotation.elements import type_name
from rangenotation.errors import RangeParseError
from rangenotation.models import BoundType, Range

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

MAX_INPUT_LENGTH = 1000
_PREVIEW_LENGTH = 50
_MIN_NOTATION_LENGTH = 6  # "[a..b]"
SEPARATOR = ".."

POSITIVE_INFINITY = frozenset(
    {"+∞", "∞", "+inf", "inf", "+INF", "INF", "+Infinity", "Infinity"}
)
NEGATIVE_INFINITY = frozenset({"-∞", "-inf", "-INF", "-Infinity"})

INVALID_FORMAT_MESSAGE = (
    "Invalid range format. Expected notation like "
    "'[a..b)', '(a..b]', '(-∞..+∞)', etc."
)


class ParserSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    lenient: bool = False


@dataclass(frozen=True)
class _RangeParts:
    lower_text: str
    upper_text: str
    lower_bound_type: BoundType
    upper_bound_type: BoundType
    lower_unbounded: bool
    upper_unbounded: bool


class RangeParser:
    """Parses interval notation such as ``[0..100)`` into ``Range`` values.

    Instances are immutable and safe to share between threads. Create them
    with ``RangeParser.builder()``::

        parser = RangeParser.builder().lenient(True).build()
        parser.parse("0..100", int)  # Range.closed_open(0, 100)
    """

    def __init__(
        self,
        adapters: Mapping[Any, TypeAdapter[Any]],
        settings: ParserSettings,
    ) -> None:
        self._adapters = MappingProxyType(dict(adapters))
        self._settings = settings

    @staticmethod
    def builder() -> RangeParserBuilder:
        return RangeParserBuilder()

    @property
    def settings(self) -> ParserSettings:
        return self._settings

    @property
    def lenient(self) -> bool:
        return self._settings.lenient

    def registered_types(self) -> tuple[Any, ...]:
        return tuple(self._adapters)

    def adapter_for(self, element_type: Any) -> TypeAdapter[Any] | None:
        return self._adapters.get(element_type)

    def parse(self, text: str, element_type: type[T] | Any) -> Range[T]:
        """Parse ``text`` into a range of ``element_type`` values.

        Raises ``RangeParseError`` for malformed notation and ``TypeError``
        when ``text`` or ``element_type`` is ``None``.
        """
        if text is None:
            raise TypeError("text must not be None")
        if not isinstance(text, str):
            raise TypeError(
                f"text must be a str, got {type(text).__name__}"
            )
        if element_type is None:
            raise TypeError("element_type must not be None")

        try:
            return self._parse(text, element_type)
        except RangeParseError as err:
            _LOGGER.debug(
                "rejected range notation %r as %s: %s",
                err.input,
                type_name(element_type),
                err.message,
            )
            raise

    def _parse(self, text: str, element_type: Any) -> Range[Any]:
        if len(text) > MAX_INPUT_LENGTH:
            raise RangeParseError(
                f"Input exceeds maximum length of {MAX_INPUT_LENGTH} "
                "characters",
                text[:_PREVIEW_LENGTH] + "...",
            )

        normalized = self._normalize(text)
        parts = _extract_parts(normalized, text)
        _check_infinity_bounds(parts, text)

        adapter = self._adapters.get(element_type)
        if adapter is None:
            raise RangeParseError(
                "No type adapter registered for: "
                f"{type_name(element_type)}",
                text,
            )

        try:
            return _build_range(parts, adapter)
        except RangeParseError:
            raise
        except Exception as exc:
            raise RangeParseError(
                f"Failed to parse range value: {exc}", text, cause=exc
            ) from exc

    def _normalize(self, text: str) -> str:
        trimmed = text.strip()
        if not trimmed:
            raise RangeParseError("Range string cannot be empty", text)
        if self.lenient and not trimmed.startswith(("[", "(")):
            return f"[{trimmed})"
        return trimmed


def _extract_parts(normalized: str, original: str) -> _RangeParts:
    if len(normalized) < _MIN_NOTATION_LENGTH:
        raise RangeParseError(INVALID_FORMAT_MESSAGE, original)

    opening = normalized[0]
    closing = normalized[-1]
    if opening not in "[(" or closing not in "])":
        raise RangeParseError(INVALID_FORMAT_MESSAGE, original)

    content = normalized[1:-1]
    separator_index = content.find(SEPARATOR)
    if separator_index == -1:
        raise RangeParseError(INVALID_FORMAT_MESSAGE, original)

    lower_text = content[:separator_index].strip()
    upper_text = content[separator_index + len(SEPARATOR) :].strip()
    if not lower_text or not upper_text:
        raise RangeParseError(INVALID_FORMAT_MESSAGE, original)

    return _RangeParts(
        lower_text=lower_text,
        upper_text=upper_text,
        lower_bound_type=(
            BoundType.CLOSED if opening == "[" else BoundType.OPEN
        ),
        upper_bound_type=(
            BoundType.CLOSED if closing == "]" else BoundType.OPEN
        ),
        lower_unbounded=lower_text in NEGATIVE_INFINITY,
        upper_unbounded=upper_text in POSITIVE_INFINITY,
    )


def _check_infinity_bounds(parts: _RangeParts, original: str) -> None:
    if parts.lower_unbounded and parts.lower_bound_type == BoundType.CLOSED:
        raise RangeParseError(
            "Invalid range: negative infinity bound must be open '(' "
            "not closed '['",
            original,
        )
    if parts.upper_unbounded and parts.upper_bound_type == BoundType.CLOSED:
        raise RangeParseError(
            "Invalid range: positive infinity bound must be open ')' "
            "not closed ']'",
            original,
        )


def _convert(adapter: TypeAdapter[Any], value: str, bound_name: str) -> Any:
    result = adapter(value)
    if result is None:
        raise RangeParseError(
            f"TypeAdapter returned null for {bound_name} bound value: "
            f"{value}",
            value,
        )
    return result


def _build_range(parts: _RangeParts, adapter: TypeAdapter[Any]) -> Range[Any]:
    if parts.lower_unbounded and parts.upper_unbounded:
        return Range.all()

    if parts.lower_unbounded:
        upper = _convert(adapter, parts.upper_text, "upper")
        if parts.upper_bound_type == BoundType.CLOSED:
            return Range.at_most(upper)
        return Range.less_than(upper)

    if parts.upper_unbounded:
        lower = _convert(adapter, parts.lower_text, "lower")
        if parts.lower_bound_type == BoundType.CLOSED:
            return Range.at_least(lower)
        return Range.greater_than(lower)

    lower = _convert(adapter, parts.lower_text, "lower")
    upper = _convert(adapter, parts.upper_text, "upper")
    if lower > upper:
        raise RangeParseError(
            f"Invalid range: lower bound ({parts.lower_text}) is greater "
            f"than upper bound ({parts.upper_text})",
            f"{parts.lower_text}{SEPARATOR}{parts.upper_text}",
        )

    match (parts.lower_bound_type, parts.upper_bound_type):
        case (BoundType.CLOSED, BoundType.CLOSED):
            return Range.closed(lower, upper)
        case (BoundType.CLOSED, BoundType.OPEN):
            return Range.closed_open(lower, upper)
        case (BoundType.OPEN, BoundType.CLOSED):
            return Range.open_closed(lower, upper)
        case _:
            return Range.open(lower, upper)


class RangeParserBuilder:
    """Collects adapter overrides and leniency for ``RangeParser``.

    Custom adapters always win over built-in ones. ``build()`` snapshots
    the current state, so one builder can produce several independent
    parsers. Not safe for concurrent mutation.
    """

    def __init__(self) -> None:
        self._adapters: dict[Any, TypeAdapter[Any]] = {}
        self._lenient = False

    def register_type(
        self, element_type: Any, adapter: TypeAdapter[Any]
    ) -> RangeParserBuilder:
        if element_type is None:
            raise TypeError("element_type must not be None")
        if adapter is None:
            raise TypeError("adapter must not be None")
        if not callable(adapter):
            raise TypeError(
                f"adapter must be callable, got {type(adapter).__name__}"
            )
        self._adapters[element_type] = adapter
        return self

    def lenient(self, lenient: bool = True) -> RangeParserBuilder:
        """Accept bracket-less ``a..b`` as shorthand for ``[a..b)``."""
        self._lenient = lenient
        return self

    def build(self) -> RangeParser:
        adapters = {**BUILTIN_ADAPTERS, **self._adapters}
        _LOGGER.debug(
            "building RangeParser with %d custom adapter(s), lenient=%s",
            len(self._adapters),
            self._lenient,
        )
        return RangeParser(adapters, ParserSettings(lenient=self._lenient))


_DEFAULT_PARSER = RangeParserBuilder().build()
_LENIENT_PARSER = RangeParserBuilder().lenient(True).build()


def default_parser() -> RangeParser:
    return _DEFAULT_PARSER


def parse_range(text: str, element_type: type[T] | Any) -> Range[T]:
    """Parse ``text`` with the shared strict parser."""
    return _DEFAULT_PARSER.parse(text, element_type)


def parse_range_lenient(text: str, element_type: type[T] | Any) -> Range[T]:
    """Parse ``text`` with the shared lenient parser."""
    return _LENIENT_PARSER.parse(text, element_type)
