"""
Rounding — округление до заданного числа дробных цифр

Округление выполняется над канонической десятичной записью числа (Decimal
quantize), а не над x · 10^precision во float, поэтому round_to(1.005, 2)
даёт 1.01, а не 1.0.

Режимы:
- round_to: ROUND_HALF_UP (половина округляется от нуля)
- ceil_to:  ROUND_CEILING (к +∞)
- floor_to: ROUND_FLOOR (к −∞)

Допустимая точность: целое в [MIN_PRECISION, MAX_PRECISION].
"""

from decimal import ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP, Decimal, localcontext
from typing import Final

from mathfix.core.math.scaled_arithmetic import canonical_decimal_string, to_float
from mathfix.errors import InvalidInputError, NumberRangeError

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

MIN_PRECISION: Final[int] = 0
MAX_PRECISION: Final[int] = 100


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_precision(
    precision: object,
    min_value: int = MIN_PRECISION,
    max_value: int = MAX_PRECISION,
) -> int:
    """
    Проверка параметра precision.

    Raises:
        InvalidInputError: precision не целое число
        NumberRangeError: precision вне [min_value, max_value]
    """
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise InvalidInputError("precision", precision, "whole number")
    if precision < min_value or precision > max_value:
        raise NumberRangeError("precision", precision, min_value=min_value, max_value=max_value)
    return precision


# =============================================================================
# QUANTIZE
# =============================================================================


def quantize(value: object, precision: int, rounding: str = ROUND_HALF_UP) -> Decimal:
    """
    Decimal-значение, округлённое до precision дробных цифр.

    Args:
        value: Число
        precision: Количество дробных цифр
        rounding: Режим округления модуля decimal

    Returns:
        Decimal с ровно precision дробными цифрами
    """
    validate_precision(precision)
    text = canonical_decimal_string(value)

    with localcontext() as ctx:
        # Коэффициент результата не должен упираться в точность контекста
        ctx.prec = len(text) + precision + 2
        return Decimal(text).quantize(Decimal(1).scaleb(-precision), rounding=rounding)


def _to_float(quantized: Decimal) -> float:
    result = float(quantized)
    # -0.0 → 0.0
    return result if result else 0.0


def round_to(value: object, precision: int = 0) -> float:
    """
    Округление half-up.

    Examples:
        >>> round_to(1.005, 2)
        1.01
        >>> round_to(-2.5)
        -3.0
    """
    return _to_float(quantize(to_float(value), precision, ROUND_HALF_UP))


def ceil_to(value: object, precision: int = 0) -> float:
    """
    Округление вверх (к +∞).

    Examples:
        >>> ceil_to(1.231, 2)
        1.24
    """
    return _to_float(quantize(to_float(value), precision, ROUND_CEILING))


def floor_to(value: object, precision: int = 0) -> float:
    """
    Округление вниз (к −∞).

    Examples:
        >>> floor_to(-1.231, 2)
        -1.24
    """
    return _to_float(quantize(to_float(value), precision, ROUND_FLOOR))
