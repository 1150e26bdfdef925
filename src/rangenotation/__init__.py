"""rangenotation: parse and format interval notation like ``[0..100)``."""

from rangenotation.adapters import BUILTIN_ADAPTERS, TypeAdapter
from rangenotation.elements import (
    Char,
    Float32,
    Instant,
    Int8,
    Int16,
    Int32,
    Int64,
)
from rangenotation.errors import RangeParseError
from rangenotation.fields import (
    OutputFormat,
    RangeField,
    range_constraint_violations,
)
from rangenotation.formatter import (
    FormatterSettings,
    RangeFormatter,
    RangeFormatterBuilder,
    format_range,
)
from rangenotation.models import BoundType, InfinityStyle, Range
from rangenotation.parser import (
    MAX_INPUT_LENGTH,
    ParserSettings,
    RangeParser,
    RangeParserBuilder,
    parse_range,
    parse_range_lenient,
)

__all__ = [
    "BUILTIN_ADAPTERS",
    "MAX_INPUT_LENGTH",
    "BoundType",
    "Char",
    "Float32",
    "FormatterSettings",
    "InfinityStyle",
    "Instant",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "OutputFormat",
    "ParserSettings",
    "Range",
    "RangeField",
    "RangeFormatter",
    "RangeFormatterBuilder",
    "RangeParseError",
    "RangeParser",
    "RangeParserBuilder",
    "TypeAdapter",
    "format_range",
    "parse_range",
    "parse_range_lenient",
    "range_constraint_violations",
]
