"""
mathfix — decimal-safe arithmetic over binary floats

    >>> import mathfix
    >>> mathfix.add(0.1, 0.2)
    0.3
    >>> mathfix.calculate("(0.1 + 0.2) * 3 - 0.5")
    0.4
    >>> mathfix.to_chinese_capital(1000000)
    '壹佰万元整'

Функции уровня пакета привязаны к одному Calculator по умолчанию, который
читает процессный global-слой конфигурации. Этот слой создаётся только
здесь; set_config / get_config / reset_config пакета работают с ним.
Отдельные калькуляторы: create_calculator(config) или Calculator(...).
"""

from typing import Any, Mapping

from mathfix.calculator import CacheStats, Calculator
from mathfix.chain import ChainableCalculator
from mathfix.core.config import ConfigLayer, FormatOptions, UnitPosition
from mathfix.core.math.scaled_arithmetic import decimal_places
from mathfix.errors import (
    ConfigurationError,
    DivisionByZeroError,
    InvalidExpressionError,
    InvalidInputError,
    MathFixError,
    NumberRangeError,
    UnbalancedParenthesesError,
)

__version__ = "1.0.0"

# =============================================================================
# COMPOSITION ROOT
# =============================================================================

GLOBAL_CONFIG = ConfigLayer("global")

_default = Calculator(global_config=GLOBAL_CONFIG)


def create_calculator(config: Mapping[str, Any] | None = None) -> Calculator:
    """
    Новый калькулятор поверх процессного global-слоя.

    Examples:
        >>> calc = create_calculator({"precision": {"default": 2}})
        >>> calc.format(3.14159)
        3.14
    """
    return Calculator(config, global_config=GLOBAL_CONFIG)


def chain(initial: object = 0) -> ChainableCalculator:
    """Цепочка вычислений над калькулятором по умолчанию."""
    return _default.chain(initial)


# Конфигурация: global-слой
set_config = GLOBAL_CONFIG.set_config
get_config = GLOBAL_CONFIG.get_config
reset_config = GLOBAL_CONFIG.reset_config

# Арифметика
add = _default.add
subtract = _default.subtract
multiply = _default.multiply
divide = _default.divide
square = _default.square
cube = _default.cube
power = _default.power
sqrt = _default.sqrt
cbrt = _default.cbrt
absolute = _default.absolute
log10 = _default.log10
ln = _default.ln
exp = _default.exp
factorial = _default.factorial
reciprocal = _default.reciprocal
percentage = _default.percentage
total = _default.total
average = _default.average
percentage_change = _default.percentage_change
compound_interest = _default.compound_interest

# Выражения
calculate = _default.calculate
calculate_batch = _default.calculate_batch

# Округление и форматирование
round = _default.round
ceil = _default.ceil
floor = _default.floor
to_percent = _default.to_percent
to_currency = _default.to_currency
to_unit = _default.to_unit
to_readable = _default.to_readable
to_scientific = _default.to_scientific
to_fraction = _default.to_fraction
format = _default.format
to_chinese_number = _default.to_chinese_number
to_chinese_capital = _default.to_chinese_capital

# Кэш
clear_cache = _default.clear_cache
get_cache_stats = _default.get_cache_stats

__all__ = [
    # Classes
    "CacheStats",
    "Calculator",
    "ChainableCalculator",
    "ConfigLayer",
    "FormatOptions",
    "UnitPosition",
    # Errors
    "ConfigurationError",
    "DivisionByZeroError",
    "InvalidExpressionError",
    "InvalidInputError",
    "MathFixError",
    "NumberRangeError",
    "UnbalancedParenthesesError",
    # Composition
    "GLOBAL_CONFIG",
    "chain",
    "create_calculator",
    "get_config",
    "reset_config",
    "set_config",
    # Arithmetic
    "absolute",
    "add",
    "average",
    "cbrt",
    "compound_interest",
    "cube",
    "decimal_places",
    "divide",
    "exp",
    "factorial",
    "ln",
    "log10",
    "multiply",
    "percentage",
    "percentage_change",
    "power",
    "reciprocal",
    "sqrt",
    "square",
    "subtract",
    "total",
    # Expressions
    "calculate",
    "calculate_batch",
    # Formatting
    "ceil",
    "floor",
    "format",
    "round",
    "to_chinese_capital",
    "to_chinese_number",
    "to_currency",
    "to_fraction",
    "to_percent",
    "to_readable",
    "to_scientific",
    "to_unit",
    # Cache
    "clear_cache",
    "get_cache_stats",
]
