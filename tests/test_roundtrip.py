import random
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

import pytest

from rangenotation.elements import Char, Instant, Int32
from rangenotation.errors import RangeParseError
from rangenotation.formatter import RangeFormatter, format_range
from rangenotation.models import InfinityStyle, Range
from rangenotation.parser import parse_range

_SHAPES = (
    Range.closed,
    Range.open,
    Range.closed_open,
    Range.open_closed,
)
_ONE_SIDED = (
    Range.at_least,
    Range.greater_than,
    Range.at_most,
    Range.less_than,
)


def test_canonical_example() -> None:
    assert format_range(Range.closed_open(0, 100)) == "[0..100)"
    assert parse_range("[0..100)", int) == Range.closed_open(0, 100)


@pytest.mark.parametrize(
    ("element_type", "lower", "upper"),
    [
        (int, -5, 10**30),
        (Int32, -(2**31), 2**31 - 1),
        (float, -0.25, 1e100),
        (Decimal, Decimal("-1.50"), Decimal("1E+3")),
        (str, "apple", "banana"),
        (Char, "a", "z"),
        (date, date(2020, 2, 29), date(2024, 12, 31)),
        (
            datetime,
            datetime(2024, 1, 1, 8, 0, 0, 500),
            datetime(2024, 1, 2),
        ),
        (time, time(0, 0), time(23, 59, 59, 999999)),
        (timedelta, -timedelta(hours=5), timedelta(days=3, seconds=1)),
        (
            Instant,
            datetime(2024, 1, 1, tzinfo=timezone.utc),
            datetime(2025, 1, 1, tzinfo=timezone(timedelta(hours=2))),
        ),
    ],
)
def test_round_trip_builtin_types(element_type, lower, upper) -> None:
    candidates = [shape(lower, upper) for shape in _SHAPES]
    candidates += [shape(lower) for shape in _ONE_SIDED[:2]]
    candidates += [shape(upper) for shape in _ONE_SIDED[2:]]
    candidates.append(Range.all())
    for value in candidates:
        assert parse_range(format_range(value), element_type) == value


@pytest.mark.parametrize("style", list(InfinityStyle))
def test_round_trip_every_infinity_style(style: InfinityStyle) -> None:
    formatter = RangeFormatter.builder().infinity_style(style).build()
    for value in (
        Range.all(),
        Range.at_least(1),
        Range.greater_than(1),
        Range.at_most(1),
        Range.less_than(1),
    ):
        assert parse_range(formatter.format(value), int) == value


@pytest.mark.full
def test_round_trip_random_int_ranges() -> None:
    rng = random.Random(20240101)
    for _ in range(2000):
        a = rng.randint(-(10**6), 10**6)
        b = rng.randint(-(10**6), 10**6)
        lower, upper = min(a, b), max(a, b)
        shape = rng.choice(_SHAPES)
        if shape is Range.open and lower == upper:
            continue
        value = shape(lower, upper)
        assert parse_range(format_range(value), int) == value


@pytest.mark.parametrize(
    ("text", "element_type"),
    [
        ("[-Inf..1]", float),
        ("[-Inf..1]", Decimal),
        ("[1..1e999]", float),
        ("(1..1e999)", float),
        ("(1..+Inf)", Decimal),
    ],
)
def test_infinite_endpoint_text_is_rejected(text, element_type) -> None:
    with pytest.raises(RangeParseError) as exc_info:
        parse_range(text, element_type)
    assert exc_info.value.message.startswith("Failed to parse range value")
    assert "infinity token" in exc_info.value.message


def test_large_decimal_endpoint_round_trips() -> None:
    value = parse_range("(1..1e999)", Decimal)
    assert value == Range.open(Decimal(1), Decimal("1E+999"))
    assert parse_range(format_range(value), Decimal) == value
