"""
Math Functions — Производные функции поверх scaled arithmetic

Модуль дополняет четыре базовые операции:
- Степени и корни (square, cube, power, sqrt, cbrt)
- Логарифмы и экспонента (log10, ln, exp)
- Целочисленные функции (factorial)
- Агрегаты (total, average) и процентные расчёты
- Сложные проценты (compound_interest)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Целые неотрицательные степени считаются через multiply (десятично точно)
2. Результаты трансцендентных функций нормализуются до
   SIGNIFICANT_DIGITS значащих цифр (убирает хвосты вида 2.9999999999999996)
3. Нарушение области определения → InvalidInputError, не NaN

ФОРМУЛЫ:
    percentage_change = (new - old) / old × 100
    compound_interest = P × (1 + r / n)^(n × t)
"""

import math
from typing import Final, Iterable

from mathfix.core.math.scaled_arithmetic import (
    add,
    divide,
    multiply,
    subtract,
    to_float,
)
from mathfix.errors import DivisionByZeroError, InvalidInputError, NumberRangeError

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Количество значащих цифр при нормализации float-результатов
SIGNIFICANT_DIGITS: Final[int] = 12

# Максимальный целый показатель, для которого power считается через multiply
EXACT_POWER_MAX_EXPONENT: Final[int] = 1024


# =============================================================================
# НОРМАЛИЗАЦИЯ
# =============================================================================


def to_significant(value: float, digits: int = SIGNIFICANT_DIGITS) -> float:
    """
    Округление float до заданного числа значащих цифр.

    Examples:
        >>> to_significant(2.9999999999999996)
        3.0
        >>> to_significant(0.30000000000000004)
        0.3
    """
    if digits <= 0:
        raise ValueError(f"digits must be positive, got {digits}")
    return float(f"{value:.{digits}g}")


# =============================================================================
# СТЕПЕНИ И КОРНИ
# =============================================================================


def square(value: object) -> float:
    """Квадрат числа: square(0.5) == 0.25."""
    return multiply(value, value)


def cube(value: object) -> float:
    """Куб числа: cube(0.5) == 0.125."""
    return multiply(multiply(value, value), value)


def power(base: object, exponent: object) -> float:
    """
    Возведение в степень.

    Целый неотрицательный показатель (до EXACT_POWER_MAX_EXPONENT) считается
    возведением в квадрат через multiply; целый отрицательный — через
    divide(1, ...); дробный — через math.pow с нормализацией.

    Raises:
        InvalidInputError: Отрицательное основание с дробным показателем
        NumberRangeError: Переполнение float

    Examples:
        >>> power(1.1, 2)
        1.21
        >>> power(2, -1)
        0.5
        >>> power(9, 0.5)
        3.0
    """
    base_val = to_float(base, "base")
    exp_val = to_float(exponent, "exponent")

    if exp_val.is_integer() and abs(exp_val) <= EXACT_POWER_MAX_EXPONENT:
        remaining = int(abs(exp_val))
        result = 1.0
        factor = base_val
        # Быстрое возведение в степень (square-and-multiply)
        while remaining:
            if remaining & 1:
                result = multiply(result, factor)
            remaining >>= 1
            if remaining:
                factor = multiply(factor, factor)

        if exp_val < 0:
            return divide(1, result)
        return result

    try:
        result = math.pow(base_val, exp_val)
    except ValueError:
        raise InvalidInputError("base", base_val, "non-negative number for fractional exponent")
    except OverflowError:
        raise NumberRangeError("power", f"{base_val}**{exp_val}")

    return to_significant(result)


def sqrt(value: object) -> float:
    """
    Квадратный корень.

    Raises:
        InvalidInputError: Если value < 0
    """
    number = to_float(value)
    if number < 0:
        raise InvalidInputError("value", number, "non-negative number")
    return math.sqrt(number)


def cbrt(value: object) -> float:
    """
    Кубический корень (определён для отрицательных чисел).

    Examples:
        >>> cbrt(27)
        3.0
        >>> cbrt(-8)
        -2.0
    """
    number = to_float(value)
    root = math.copysign(abs(number) ** (1.0 / 3.0), number)

    # Точные кубы возвращаются без хвоста 3.0000000000000004
    nearest = round(root)
    if nearest**3 == number:
        return float(nearest)
    return to_significant(root)


def absolute(value: object) -> float:
    """Модуль числа."""
    return abs(to_float(value))


# =============================================================================
# ЛОГАРИФМЫ И ЭКСПОНЕНТА
# =============================================================================


def log10(value: object) -> float:
    """
    Десятичный логарифм.

    Raises:
        InvalidInputError: Если value <= 0
    """
    number = to_float(value)
    if number <= 0:
        raise InvalidInputError("value", number, "positive number")
    return math.log10(number)


def ln(value: object) -> float:
    """
    Натуральный логарифм.

    Raises:
        InvalidInputError: Если value <= 0
    """
    number = to_float(value)
    if number <= 0:
        raise InvalidInputError("value", number, "positive number")
    return math.log(number)


def exp(value: object) -> float:
    """e^value; переполнение → NumberRangeError."""
    number = to_float(value)
    try:
        return math.exp(number)
    except OverflowError:
        raise NumberRangeError("exp", number)


# =============================================================================
# ЦЕЛОЧИСЛЕННЫЕ ФУНКЦИИ
# =============================================================================


def factorial(value: object) -> float:
    """
    Факториал неотрицательного целого.

    Raises:
        InvalidInputError: Отрицательное или дробное значение
        NumberRangeError: Результат не помещается во float (n > 170)

    Examples:
        >>> factorial(5)
        120.0
        >>> factorial(0)
        1.0
    """
    number = to_float(value)
    if number < 0 or not number.is_integer():
        raise InvalidInputError("value", number, "non-negative integer")

    try:
        return float(math.factorial(int(number)))
    except OverflowError:
        raise NumberRangeError("value", number, max_value=171)


def reciprocal(value: object) -> float:
    """
    Обратное число 1 / value.

    Raises:
        DivisionByZeroError: Если value == 0
    """
    number = to_float(value)
    if number == 0:
        raise DivisionByZeroError(1)
    return divide(1, number)


# =============================================================================
# ПРОЦЕНТЫ И АГРЕГАТЫ
# =============================================================================


def percentage(value: object) -> float:
    """Перевод процентов в долю: percentage(25) == 0.25."""
    return divide(value, 100)


def total(values: Iterable[object]) -> float:
    """
    Точная сумма последовательности.

    Raises:
        InvalidInputError: Пустая последовательность
    """
    items = list(values)
    if not items:
        raise InvalidInputError("values", items, "non-empty sequence")

    result = 0.0
    for item in items:
        result = add(result, item)
    return result


def average(values: Iterable[object]) -> float:
    """
    Среднее арифметическое.

    Raises:
        InvalidInputError: Пустая последовательность
    """
    items = list(values)
    return divide(total(items), len(items))


def percentage_change(old_value: object, new_value: object) -> float:
    """
    Относительное изменение в процентах.

    Raises:
        DivisionByZeroError: Если old_value == 0

    Examples:
        >>> percentage_change(100, 110)
        10.0
    """
    old = to_float(old_value, "old_value")
    if old == 0:
        raise DivisionByZeroError(new_value)

    change = subtract(new_value, old)
    return multiply(divide(change, old), 100)


def compound_interest(
    principal: object,
    rate: object,
    years: object,
    periods_per_year: int = 1,
) -> float:
    """
    Сумма после начисления сложных процентов.

    A = P × (1 + r / n)^(n × t)

    Args:
        principal: Начальная сумма P
        rate: Годовая ставка r (доля, 0.05 = 5%)
        years: Срок t (лет)
        periods_per_year: Число начислений в год n

    Raises:
        InvalidInputError: Если periods_per_year <= 0

    Examples:
        >>> compound_interest(1000, 0.05, 2)
        1102.5
    """
    if periods_per_year <= 0:
        raise InvalidInputError("periods_per_year", periods_per_year, "positive integer")

    rate_per_period = divide(rate, periods_per_year)
    growth = add(1, rate_per_period)
    periods = multiply(periods_per_year, years)
    return multiply(principal, power(growth, periods))
