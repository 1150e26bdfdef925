from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator

T = TypeVar("T")


class BoundType(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


class InfinityStyle(Enum):
    """Text pair used for unbounded endpoints: (positive, negative)."""

    SYMBOL = ("+∞", "-∞")
    WORD_LOWER = ("+inf", "-inf")
    WORD_UPPER = ("+INF", "-INF")
    WORD_FULL = ("+Infinity", "-Infinity")

    @property
    def positive(self) -> str:
        return self.value[0]

    @property
    def negative(self) -> str:
        return self.value[1]


def _describe(
    lower: Any,
    lower_bound_type: BoundType,
    upper: Any,
    upper_bound_type: BoundType,
) -> str:
    opening = "[" if lower_bound_type == BoundType.CLOSED else "("
    closing = "]" if upper_bound_type == BoundType.CLOSED else ")"
    lower_text = "-∞" if lower is None else str(lower)
    upper_text = "+∞" if upper is None else str(upper)
    return f"{opening}{lower_text}..{upper_text}{closing}"


def _check_endpoints(
    lower: Any,
    lower_bound_type: BoundType,
    upper: Any,
    upper_bound_type: BoundType,
) -> None:
    if lower is None and lower_bound_type == BoundType.CLOSED:
        raise ValueError("an unbounded lower side cannot be closed")
    if upper is None and upper_bound_type == BoundType.CLOSED:
        raise ValueError("an unbounded upper side cannot be closed")
    if lower is None or upper is None:
        return
    both_open = (
        lower_bound_type == BoundType.OPEN
        and upper_bound_type == BoundType.OPEN
    )
    if lower > upper or (lower == upper and both_open):
        description = _describe(
            lower, lower_bound_type, upper, upper_bound_type
        )
        raise ValueError(f"Invalid range: {description}")


class Range(BaseModel, Generic[T]):
    """Immutable interval over an ordered element type.

    A ``None`` endpoint means that side is unbounded; its bound type is
    always ``OPEN``. Use the factory classmethods rather than the
    constructor, they mirror the nine interval shapes:

    ======================  ===============
    ``closed(a, b)``        ``[a..b]``
    ``open(a, b)``          ``(a..b)``
    ``closed_open(a, b)``   ``[a..b)``
    ``open_closed(a, b)``   ``(a..b]``
    ``at_least(a)``         ``[a..+∞)``
    ``greater_than(a)``     ``(a..+∞)``
    ``at_most(b)``          ``(-∞..b]``
    ``less_than(b)``        ``(-∞..b)``
    ``all()``               ``(-∞..+∞)``
    ======================  ===============
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    lower: T | None = None
    lower_bound_type: BoundType = BoundType.OPEN
    upper: T | None = None
    upper_bound_type: BoundType = BoundType.OPEN

    @model_validator(mode="after")
    def _validate_endpoints(self) -> "Range[T]":
        _check_endpoints(
            self.lower,
            self.lower_bound_type,
            self.upper,
            self.upper_bound_type,
        )
        return self

    @classmethod
    def _of(
        cls,
        lower: Any,
        lower_bound_type: BoundType,
        upper: Any,
        upper_bound_type: BoundType,
    ) -> "Range[Any]":
        # Plain ValueError for callers instead of a pydantic ValidationError.
        _check_endpoints(lower, lower_bound_type, upper, upper_bound_type)
        return cls.model_construct(
            lower=lower,
            lower_bound_type=lower_bound_type,
            upper=upper,
            upper_bound_type=upper_bound_type,
        )

    @classmethod
    def closed(cls, lower: T, upper: T) -> "Range[T]":
        return cls._of(lower, BoundType.CLOSED, upper, BoundType.CLOSED)

    @classmethod
    def open(cls, lower: T, upper: T) -> "Range[T]":
        return cls._of(lower, BoundType.OPEN, upper, BoundType.OPEN)

    @classmethod
    def closed_open(cls, lower: T, upper: T) -> "Range[T]":
        return cls._of(lower, BoundType.CLOSED, upper, BoundType.OPEN)

    @classmethod
    def open_closed(cls, lower: T, upper: T) -> "Range[T]":
        return cls._of(lower, BoundType.OPEN, upper, BoundType.CLOSED)

    @classmethod
    def at_least(cls, lower: T) -> "Range[T]":
        return cls._of(lower, BoundType.CLOSED, None, BoundType.OPEN)

    @classmethod
    def greater_than(cls, lower: T) -> "Range[T]":
        return cls._of(lower, BoundType.OPEN, None, BoundType.OPEN)

    @classmethod
    def at_most(cls, upper: T) -> "Range[T]":
        return cls._of(None, BoundType.OPEN, upper, BoundType.CLOSED)

    @classmethod
    def less_than(cls, upper: T) -> "Range[T]":
        return cls._of(None, BoundType.OPEN, upper, BoundType.OPEN)

    @classmethod
    def all(cls) -> "Range[Any]":
        return cls._of(None, BoundType.OPEN, None, BoundType.OPEN)

    @property
    def has_lower_bound(self) -> bool:
        return self.lower is not None

    @property
    def has_upper_bound(self) -> bool:
        return self.upper is not None

    @property
    def lower_endpoint(self) -> T:
        if self.lower is None:
            raise ValueError("range has no lower bound")
        return self.lower

    @property
    def upper_endpoint(self) -> T:
        if self.upper is None:
            raise ValueError("range has no upper bound")
        return self.upper

    def is_empty(self) -> bool:
        """True for ``[a..a)`` and ``(a..a]``, which contain no values."""
        if self.lower is None or self.upper is None:
            return False
        return self.lower == self.upper and (
            self.lower_bound_type == BoundType.OPEN
            or self.upper_bound_type == BoundType.OPEN
        )

    def contains(self, value: T) -> bool:
        if self.lower is not None:
            if value < self.lower:
                return False
            if value == self.lower and self.lower_bound_type == BoundType.OPEN:
                return False
        if self.upper is not None:
            if value > self.upper:
                return False
            if value == self.upper and self.upper_bound_type == BoundType.OPEN:
                return False
        return True

    def __str__(self) -> str:
        return _describe(
            self.lower,
            self.lower_bound_type,
            self.upper,
            self.upper_bound_type,
        )
