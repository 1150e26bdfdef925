"""Range-typed fields for pydantic models.

``RangeField`` builds an annotated type that accepts notation strings,
``Range`` instances, or dumped range objects, and serializes back to
notation (or to the object layout)::

    class Query(BaseModel):
        window: RangeField(int, require_lower_bound=True)

    Query(window="[0..100)").window  # Range.closed_open(0, 100)
"""

from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Any

from pydantic import PlainSerializer, PlainValidator

from rangenotation.adapters import TypeAdapter
from rangenotation.elements import type_name
from rangenotation.formatter import RangeFormatter, default_formatter
from rangenotation.models import BoundType, Range
from rangenotation.parser import RangeParser, default_parser


class OutputFormat(str, Enum):
    STRING_NOTATION = "string_notation"
    JSON_OBJECT = "json_object"


def range_constraint_violations(
    range_value: Range[Any],
    *,
    not_empty: bool = False,
    require_lower_bound: bool = False,
    require_upper_bound: bool = False,
) -> list[str]:
    violations: list[str] = []
    if not_empty and range_value.is_empty():
        violations.append("Range must not be empty")
    if require_lower_bound and not range_value.has_lower_bound:
        violations.append("Range must have a lower bound")
    if require_upper_bound and not range_value.has_upper_bound:
        violations.append("Range must have an upper bound")
    return violations


def _endpoint_from_json(
    value: Any, adapter: TypeAdapter[Any], side: str
) -> Any:
    if value is None:
        return None
    converted = adapter(value if isinstance(value, str) else str(value))
    if converted is None:
        raise ValueError(f"{side} endpoint could not be converted: {value}")
    return converted


def _range_from_mapping(
    data: Mapping[str, Any], adapter: TypeAdapter[Any]
) -> Range[Any]:
    # A side is bounded only when both its endpoint and bound type are set.
    lower = _endpoint_from_json(data.get("lower"), adapter, "lower")
    upper = _endpoint_from_json(data.get("upper"), adapter, "upper")
    lower_type = data.get("lower_bound_type")
    upper_type = data.get("upper_bound_type")
    lower_bound = (
        None if lower is None or lower_type is None else BoundType(lower_type)
    )
    upper_bound = (
        None if upper is None or upper_type is None else BoundType(upper_type)
    )

    match lower_bound, upper_bound:
        case None, None:
            return Range.all()
        case None, BoundType.CLOSED:
            return Range.at_most(upper)
        case None, BoundType.OPEN:
            return Range.less_than(upper)
        case BoundType.CLOSED, None:
            return Range.at_least(lower)
        case BoundType.OPEN, None:
            return Range.greater_than(lower)
        case BoundType.CLOSED, BoundType.CLOSED:
            return Range.closed(lower, upper)
        case BoundType.CLOSED, BoundType.OPEN:
            return Range.closed_open(lower, upper)
        case BoundType.OPEN, BoundType.CLOSED:
            return Range.open_closed(lower, upper)
        case _:
            return Range.open(lower, upper)


def RangeField(
    element_type: Any,
    *,
    parser: RangeParser | None = None,
    formatter: RangeFormatter | None = None,
    output: OutputFormat = OutputFormat.STRING_NOTATION,
    not_empty: bool = False,
    require_lower_bound: bool = False,
    require_upper_bound: bool = False,
) -> Any:
    """Annotated ``Range`` type for use as a pydantic field annotation."""
    range_parser = parser or default_parser()
    range_formatter = formatter or default_formatter()

    def _validate(value: Any) -> Range[Any]:
        if isinstance(value, Range):
            range_value = value
        elif isinstance(value, str):
            range_value = range_parser.parse(value, element_type)
        elif isinstance(value, Mapping):
            adapter = range_parser.adapter_for(element_type)
            if adapter is None:
                raise ValueError(
                    "No type adapter registered for: "
                    f"{type_name(element_type)}"
                )
            range_value = _range_from_mapping(value, adapter)
        else:
            raise ValueError(
                "expected range notation or range object, got "
                f"{type(value).__name__}"
            )

        violations = range_constraint_violations(
            range_value,
            not_empty=not_empty,
            require_lower_bound=require_lower_bound,
            require_upper_bound=require_upper_bound,
        )
        if violations:
            raise ValueError("; ".join(violations))
        return range_value

    def _serialize(value: Range[Any]) -> Any:
        if output == OutputFormat.JSON_OBJECT:
            return value.model_dump(mode="json")
        return range_formatter.format(value)

    return Annotated[
        Range,
        PlainValidator(_validate),
        PlainSerializer(_serialize),
    ]
