from __future__ import annotations

import logging
from datetime import date, time, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict

from rangenotation.durations import format_iso_duration
from rangenotation.models import BoundType, InfinityStyle, Range

_LOGGER = logging.getLogger(__name__)


class FormatterSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    infinity_style: InfinityStyle = InfinityStyle.SYMBOL


def element_text(value: Any) -> str:
    """Natural text form of an endpoint value.

    Temporal values use their ISO-8601 form so the built-in adapters can
    read them back; everything else uses ``str``.
    """
    match value:
        case timedelta():
            return format_iso_duration(value)
        case date() | time():
            return value.isoformat()
        case _:
            return str(value)


class RangeFormatter:
    """Renders ``Range`` values as interval notation, e.g. ``[0..100)``."""

    def __init__(self, settings: FormatterSettings) -> None:
        self._settings = settings

    @staticmethod
    def builder() -> RangeFormatterBuilder:
        return RangeFormatterBuilder()

    @property
    def settings(self) -> FormatterSettings:
        return self._settings

    @property
    def infinity_style(self) -> InfinityStyle:
        return self._settings.infinity_style

    def format(self, range_value: Range[Any]) -> str:
        if range_value is None:
            raise TypeError("range_value must not be None")

        style = self._settings.infinity_style
        parts: list[str] = []
        if range_value.has_lower_bound:
            closed = range_value.lower_bound_type == BoundType.CLOSED
            parts.append("[" if closed else "(")
            parts.append(element_text(range_value.lower_endpoint))
        else:
            parts.append("(")
            parts.append(style.negative)

        parts.append("..")

        if range_value.has_upper_bound:
            closed = range_value.upper_bound_type == BoundType.CLOSED
            parts.append(element_text(range_value.upper_endpoint))
            parts.append("]" if closed else ")")
        else:
            parts.append(style.positive)
            parts.append(")")
        return "".join(parts)


class RangeFormatterBuilder:
    def __init__(self) -> None:
        self._infinity_style = InfinityStyle.SYMBOL

    def infinity_style(
        self, infinity_style: InfinityStyle
    ) -> RangeFormatterBuilder:
        if infinity_style is None:
            raise TypeError("infinity_style must not be None")
        self._infinity_style = InfinityStyle(infinity_style)
        return self

    def build(self) -> RangeFormatter:
        _LOGGER.debug(
            "building RangeFormatter with infinity_style=%s",
            self._infinity_style.name,
        )
        return RangeFormatter(
            FormatterSettings(infinity_style=self._infinity_style)
        )


_FORMATTERS = {
    style: RangeFormatterBuilder().infinity_style(style).build()
    for style in InfinityStyle
}


def default_formatter() -> RangeFormatter:
    return _FORMATTERS[InfinityStyle.SYMBOL]


def format_range(
    range_value: Range[Any],
    infinity_style: InfinityStyle = InfinityStyle.SYMBOL,
) -> str:
    """Format with the shared formatter for ``infinity_style``."""
    return _FORMATTERS[InfinityStyle(infinity_style)].format(range_value)
