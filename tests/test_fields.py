from datetime import date
from decimal import Decimal

import pytest
from pydantic import BaseModel, ValidationError

from rangenotation.fields import (
    OutputFormat,
    RangeField,
    range_constraint_violations,
)
from rangenotation.formatter import RangeFormatter
from rangenotation.models import InfinityStyle, Range
from rangenotation.parser import RangeParser


class PriceFilter(BaseModel):
    price: RangeField(Decimal)
    window: RangeField(date, output=OutputFormat.JSON_OBJECT) | None = None


class BoundedQuery(BaseModel):
    limit: RangeField(int, require_lower_bound=True, require_upper_bound=True)


class NonEmptyQuery(BaseModel):
    span: RangeField(int, not_empty=True)


_LENIENT_WORDS = RangeField(
    int,
    parser=RangeParser.builder().lenient(True).build(),
    formatter=RangeFormatter.builder()
    .infinity_style(InfinityStyle.WORD_LOWER)
    .build(),
)


class LenientQuery(BaseModel):
    span: _LENIENT_WORDS


def test_parses_notation_strings() -> None:
    model = PriceFilter(price="[0.50..10.00)")
    assert model.price == Range.closed_open(Decimal("0.50"), Decimal("10.00"))


def test_accepts_range_instances() -> None:
    value = Range.at_least(Decimal("1"))
    assert PriceFilter(price=value).price is value


def test_accepts_dumped_objects() -> None:
    model = PriceFilter(
        price={
            "lower": "1.5",
            "lower_bound_type": "closed",
            "upper": None,
            "upper_bound_type": "open",
        }
    )
    assert model.price == Range.at_least(Decimal("1.5"))


def test_parse_error_message_surfaces() -> None:
    with pytest.raises(ValidationError) as exc_info:
        PriceFilter(price="[10..1]")
    assert "greater than upper bound" in str(exc_info.value)


def test_rejects_other_input_types() -> None:
    with pytest.raises(ValidationError, match="expected range notation"):
        PriceFilter(price=5)


def test_object_input_skips_unknown_keys() -> None:
    model = PriceFilter(
        price={
            "lower": "1",
            "lower_bound_type": "closed",
            "upper": "2",
            "upper_bound_type": "open",
            "step": "0.5",
        }
    )
    assert model.price == Range.closed_open(Decimal("1"), Decimal("2"))


def test_object_side_without_bound_type_is_unbounded() -> None:
    assert PriceFilter(price={"lower": "1", "upper": "2"}).price == (
        Range.all()
    )
    model = PriceFilter(price={"upper": "2", "upper_bound_type": "closed"})
    assert model.price == Range.at_most(Decimal("2"))


def test_object_endpoints_use_element_adapter() -> None:
    model = BoundedQuery(
        limit={
            "lower": 1,
            "lower_bound_type": "open",
            "upper": 10,
            "upper_bound_type": "closed",
        }
    )
    assert model.limit == Range.open_closed(1, 10)
    with pytest.raises(ValidationError, match="Invalid range"):
        BoundedQuery(
            limit={
                "lower": 10,
                "lower_bound_type": "closed",
                "upper": 1,
                "upper_bound_type": "closed",
            }
        )


def test_serializes_to_notation_by_default() -> None:
    model = PriceFilter(price="(-∞..9.99]")
    assert model.model_dump(mode="json") == {
        "price": "(-∞..9.99]",
        "window": None,
    }


def test_serializes_to_json_object() -> None:
    model = PriceFilter(price="[1..2]", window="[2024-01-01..2024-02-01)")
    assert model.model_dump(mode="json")["window"] == {
        "lower": "2024-01-01",
        "lower_bound_type": "closed",
        "upper": "2024-02-01",
        "upper_bound_type": "open",
    }


def test_json_round_trip_through_model() -> None:
    model = PriceFilter(price="[1..2]", window="[2024-01-01..+∞)")
    restored = PriceFilter.model_validate_json(model.model_dump_json())
    assert restored == model


def test_bound_requirements() -> None:
    assert BoundedQuery(limit="[1..10]").limit == Range.closed(1, 10)
    with pytest.raises(ValidationError, match="must have a lower bound"):
        BoundedQuery(limit="(-∞..10]")
    with pytest.raises(ValidationError, match="must have an upper bound"):
        BoundedQuery(limit="[1..+∞)")


def test_not_empty_requirement() -> None:
    assert NonEmptyQuery(span="[1..1]").span == Range.closed(1, 1)
    with pytest.raises(ValidationError, match="must not be empty"):
        NonEmptyQuery(span="[1..1)")


def test_custom_parser_and_formatter() -> None:
    model = LenientQuery(span="5..+∞")
    assert model.span == Range.at_least(5)
    assert model.model_dump(mode="json") == {"span": "[5..+inf)"}


def test_constraint_violations_collects_all() -> None:
    assert range_constraint_violations(Range.all()) == []
    assert range_constraint_violations(
        Range.all(),
        require_lower_bound=True,
        require_upper_bound=True,
    ) == [
        "Range must have a lower bound",
        "Range must have an upper bound",
    ]
    assert range_constraint_violations(
        Range.closed_open(3, 3), not_empty=True
    ) == ["Range must not be empty"]
