"""
Scaled Arithmetic — Decimal-safe операции над binary float

Модуль устраняет артефакты двоичной арифметики (0.1 + 0.2 = 0.30000000000000004):
- Каноническая десятичная строка числа (без экспоненциальной записи)
- Определение scale (количества дробных цифр) числа
- Перевод операндов в целые числа через ScaleFactor = 10^scale
- add / subtract / multiply / divide над целыми, обратное деление на factor

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. add/subtract/multiply точны для десятично-представимых операндов
2. ScaleFactor — всегда целая неотрицательная степень 10 (Python int)
3. divide выравнивает scale операндов, но НЕ гарантирует десятичную
   точность частного (1 / 3 остаётся float), результат не переокругляется
4. Все операции чистые, детерминированы и воспроизводимы

ПОДДЕРЖИВАЕМЫЙ ДИАПАЗОН:
    Любой конечный float. Каноническая строка строится из кратчайшего
    round-trip представления (repr) и разворачивается в обычную запись,
    поэтому 1e-7 имеет scale 7, а 1e21 — scale 0.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Final

from mathfix.errors import DivisionByZeroError, InvalidInputError, NumberRangeError

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Основание масштабирования
SCALE_BASE: Final[int] = 10


# =============================================================================
# ВАЛИДАЦИЯ ВХОДОВ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное
    """
    return math.isfinite(value)


def to_float(value: object, name: str = "value") -> float:
    """
    Приведение аргумента к конечному float.

    Принимает int, float, Decimal/Fraction и числовые строки ("0.1", " 2e3 ").
    bool не считается числом.

    Args:
        value: Исходное значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Конечный float

    Raises:
        InvalidInputError: Если значение не число, NaN или Inf

    Examples:
        >>> to_float(1)
        1.0
        >>> to_float("0.25")
        0.25
    """
    if isinstance(value, bool):
        raise InvalidInputError(name, value)

    if isinstance(value, (Real, Decimal)):
        try:
            result = float(value)
        except OverflowError:
            raise InvalidInputError(name, value)
    elif isinstance(value, str):
        try:
            result = float(value.strip())
        except ValueError:
            raise InvalidInputError(name, value)
    else:
        raise InvalidInputError(name, value)

    if not is_valid_float(result):
        raise InvalidInputError(name, value)

    return result


# =============================================================================
# DECIMAL INSPECTOR
# =============================================================================


def canonical_decimal_string(value: object) -> str:
    """
    Каноническая десятичная запись числа без экспоненты.

    Основана на кратчайшем round-trip представлении float (repr), поэтому
    0.1 остаётся "0.1", а не 0.1000000000000000055511151231257827.

    Args:
        value: Число

    Returns:
        Строка вида "-12.5", "3", "0.0000001"

    Examples:
        >>> canonical_decimal_string(3.0)
        '3'
        >>> canonical_decimal_string(1e-7)
        '0.0000001'
        >>> canonical_decimal_string(1e21)
        '1000000000000000000000'
    """
    number = to_float(value)

    # -0.0 и 0.0 одинаково печатаются как "0"
    if number == 0:
        return "0"

    return format(Decimal(repr(number)).normalize(), "f")


def decimal_places(value: object) -> int:
    """
    Количество дробных цифр (scale) в канонической записи числа.

    Args:
        value: Число

    Returns:
        Число цифр после десятичной точки; для целых — 0

    Examples:
        >>> decimal_places(0.125)
        3
        >>> decimal_places(42)
        0
        >>> decimal_places(1e-7)
        7
    """
    text = canonical_decimal_string(value)
    if "." not in text:
        return 0
    return len(text.split(".", 1)[1])


def scale_factor(scale: int) -> int:
    """
    ScaleFactor = 10^scale.

    Raises:
        ValueError: Если scale отрицательный
    """
    if scale < 0:
        raise ValueError(f"scale must be non-negative, got {scale}")
    return SCALE_BASE**scale


def to_scaled_integer(value: object, scale: int) -> int:
    """
    Целое представление value · 10^scale.

    Точно для scale >= decimal_places(value); при меньшем scale значение
    округляется half-up.

    Examples:
        >>> to_scaled_integer(0.1, 1)
        1
        >>> to_scaled_integer(1.25, 3)
        1250
    """
    if scale < 0:
        raise ValueError(f"scale must be non-negative, got {scale}")

    scaled = Decimal(canonical_decimal_string(value)).scaleb(scale)
    return int(scaled.to_integral_value(rounding=ROUND_HALF_UP))


def _int_ratio(numerator: int, denominator: int, operation: str) -> float:
    # int / int в Python корректно округляется до ближайшего float
    try:
        return numerator / denominator
    except OverflowError:
        raise NumberRangeError(f"{operation} result", f"{numerator}/{denominator}")


# =============================================================================
# SCALED ARITHMETIC
# =============================================================================


def add(a: object, b: object) -> float:
    """
    Точное сложение.

    scale = max(scale_a, scale_b); операнды переводятся в целые по общему
    factor, складываются и делятся обратно.

    Examples:
        >>> add(0.1, 0.2)
        0.3
        >>> add(1.005, 2)
        3.005
    """
    a_val = to_float(a, "a")
    b_val = to_float(b, "b")

    scale = max(decimal_places(a_val), decimal_places(b_val))
    total = to_scaled_integer(a_val, scale) + to_scaled_integer(b_val, scale)
    return _int_ratio(total, scale_factor(scale), "add")


def subtract(a: object, b: object) -> float:
    """
    Точное вычитание.

    Examples:
        >>> subtract(0.3, 0.1)
        0.2
    """
    a_val = to_float(a, "a")
    b_val = to_float(b, "b")

    scale = max(decimal_places(a_val), decimal_places(b_val))
    difference = to_scaled_integer(a_val, scale) - to_scaled_integer(b_val, scale)
    return _int_ratio(difference, scale_factor(scale), "subtract")


def multiply(a: object, b: object) -> float:
    """
    Точное умножение.

    Scale операндов независимы; произведение целых делится на
    10^(scale_a + scale_b).

    Examples:
        >>> multiply(0.1, 3)
        0.3
        >>> multiply(0.2, 0.2)
        0.04
    """
    a_val = to_float(a, "a")
    b_val = to_float(b, "b")

    scale_a = decimal_places(a_val)
    scale_b = decimal_places(b_val)
    product = to_scaled_integer(a_val, scale_a) * to_scaled_integer(b_val, scale_b)
    return _int_ratio(product, scale_factor(scale_a + scale_b), "multiply")


def divide(a: object, b: object) -> float:
    """
    Деление с выравниванием scale.

    Оба операнда переводятся в целые по общему factor (он сокращается),
    частное целых возвращается как float без переокругления. Десятичная
    точность результата НЕ гарантируется: divide(1, 3) == 1 / 3.

    Raises:
        DivisionByZeroError: Если b == 0

    Examples:
        >>> divide(0.3, 0.1)
        3.0
        >>> divide(0.69, 10)
        0.069
    """
    a_val = to_float(a, "a")
    b_val = to_float(b, "b")

    if b_val == 0:
        raise DivisionByZeroError(a_val)

    scale = max(decimal_places(a_val), decimal_places(b_val))
    return _int_ratio(
        to_scaled_integer(a_val, scale),
        to_scaled_integer(b_val, scale),
        "divide",
    )
