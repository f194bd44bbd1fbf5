"""
Formatting — округление, отображение чисел и китайские цифры.
"""

from mathfix.core.formatting.formatter import (
    READABLE_UNITS,
    format_number,
    group_thousands,
    number_to_string,
    to_currency,
    to_fraction,
    to_percent,
    to_readable,
    to_scientific,
    to_unit,
)
from mathfix.core.formatting.numerals import (
    CHINESE_CAPITAL_LIMIT,
    CHINESE_NUMBER_LIMIT,
    convert_integer,
    to_capital_digits,
    to_chinese_capital,
    to_chinese_number,
)
from mathfix.core.formatting.rounding import (
    MAX_PRECISION,
    MIN_PRECISION,
    ceil_to,
    floor_to,
    quantize,
    round_to,
    validate_precision,
)

__all__ = [
    # Rounding
    "MAX_PRECISION",
    "MIN_PRECISION",
    "ceil_to",
    "floor_to",
    "quantize",
    "round_to",
    "validate_precision",
    # Formatter
    "READABLE_UNITS",
    "format_number",
    "group_thousands",
    "number_to_string",
    "to_currency",
    "to_fraction",
    "to_percent",
    "to_readable",
    "to_scientific",
    "to_unit",
    # Numerals
    "CHINESE_CAPITAL_LIMIT",
    "CHINESE_NUMBER_LIMIT",
    "convert_integer",
    "to_capital_digits",
    "to_chinese_capital",
    "to_chinese_number",
]
