"""
Core math modules для mathfix

Decimal-safe арифметика над float и производные функции поверх неё.
"""

# Scaled Arithmetic
from mathfix.core.math.scaled_arithmetic import (
    SCALE_BASE,
    add,
    canonical_decimal_string,
    decimal_places,
    divide,
    is_valid_float,
    multiply,
    scale_factor,
    subtract,
    to_float,
    to_scaled_integer,
)

# Functions
from mathfix.core.math.functions import (
    EXACT_POWER_MAX_EXPONENT,
    SIGNIFICANT_DIGITS,
    absolute,
    average,
    cbrt,
    compound_interest,
    cube,
    exp,
    factorial,
    ln,
    log10,
    percentage,
    percentage_change,
    power,
    reciprocal,
    sqrt,
    square,
    to_significant,
    total,
)

__all__ = [
    # Scaled Arithmetic: Constants
    "SCALE_BASE",
    # Scaled Arithmetic: Inspection
    "canonical_decimal_string",
    "decimal_places",
    "is_valid_float",
    "scale_factor",
    "to_float",
    "to_scaled_integer",
    # Scaled Arithmetic: Operations
    "add",
    "divide",
    "multiply",
    "subtract",
    # Functions: Constants
    "EXACT_POWER_MAX_EXPONENT",
    "SIGNIFICANT_DIGITS",
    # Functions
    "absolute",
    "average",
    "cbrt",
    "compound_interest",
    "cube",
    "exp",
    "factorial",
    "ln",
    "log10",
    "percentage",
    "percentage_change",
    "power",
    "reciprocal",
    "sqrt",
    "square",
    "to_significant",
    "total",
]
