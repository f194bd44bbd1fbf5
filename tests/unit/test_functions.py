"""
Тесты для модуля Math Functions

Проверяет:
1. Нормализацию до значащих цифр
2. Степени и корни (точность целых степеней)
3. Логарифмы, экспоненту, факториал
4. Проценты и агрегаты
5. Сложные проценты
6. Нарушения области определения
"""

import math

import pytest

from mathfix.core.math.functions import (
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
from mathfix.errors import DivisionByZeroError, InvalidInputError, NumberRangeError

# =============================================================================
# НОРМАЛИЗАЦИЯ
# =============================================================================


class TestToSignificant:
    """Тесты для to_significant"""

    def test_removes_float_tails(self) -> None:
        assert to_significant(2.9999999999999996) == 3.0
        assert to_significant(0.30000000000000004) == 0.3

    def test_custom_digits(self) -> None:
        assert to_significant(3.14159, 3) == 3.14

    def test_non_positive_digits_rejected(self) -> None:
        with pytest.raises(ValueError):
            to_significant(1.0, 0)


# =============================================================================
# СТЕПЕНИ И КОРНИ
# =============================================================================


class TestPowers:
    """Тесты для square / cube / power"""

    def test_square_and_cube(self) -> None:
        assert square(0.5) == 0.25
        assert square(0.1) == 0.01
        assert cube(0.5) == 0.125
        assert cube(-2) == -8

    @pytest.mark.parametrize(
        "base, exponent, expected",
        [
            (1.1, 2, 1.21),
            (0.1, 3, 0.001),
            (2, 10, 1024),
            (2, -1, 0.5),
            (5, 0, 1),
            (9, 0.5, 3.0),
        ],
    )
    def test_power(self, base, exponent, expected) -> None:
        """Целые степени десятично точны"""
        assert power(base, exponent) == expected

    def test_negative_base_fractional_exponent(self) -> None:
        with pytest.raises(InvalidInputError):
            power(-8, 0.5)

    def test_power_overflow(self) -> None:
        with pytest.raises(NumberRangeError):
            power(10, 400)


class TestRoots:
    """Тесты для sqrt / cbrt"""

    def test_sqrt(self) -> None:
        assert sqrt(16) == 4.0
        assert sqrt(0.25) == 0.5

    def test_sqrt_negative(self) -> None:
        with pytest.raises(InvalidInputError, match="non-negative"):
            sqrt(-1)

    def test_cbrt_exact_cubes(self) -> None:
        """Точные кубы без хвостов"""
        assert cbrt(27) == 3.0
        assert cbrt(-8) == -2.0
        assert cbrt(0) == 0.0

    def test_cbrt_irrational(self) -> None:
        assert cbrt(2) == pytest.approx(1.2599210498948732)

    def test_absolute(self) -> None:
        assert absolute(-2.5) == 2.5
        assert absolute(3) == 3.0


# =============================================================================
# ЛОГАРИФМЫ, ЭКСПОНЕНТА, ФАКТОРИАЛ
# =============================================================================


class TestTranscendental:
    """Тесты для log10 / ln / exp"""

    def test_log10(self) -> None:
        assert log10(1000) == 3.0

    def test_ln(self) -> None:
        assert ln(1) == 0.0
        assert ln(math.e) == pytest.approx(1.0)

    @pytest.mark.parametrize("value", [0, -1])
    def test_log_domain(self, value) -> None:
        with pytest.raises(InvalidInputError, match="positive"):
            log10(value)
        with pytest.raises(InvalidInputError, match="positive"):
            ln(value)

    def test_exp(self) -> None:
        assert exp(0) == 1.0
        assert exp(1) == pytest.approx(math.e)

    def test_exp_overflow(self) -> None:
        with pytest.raises(NumberRangeError):
            exp(1000)


class TestFactorial:
    """Тесты для factorial"""

    def test_values(self) -> None:
        assert factorial(0) == 1.0
        assert factorial(5) == 120.0
        assert factorial(5.0) == 120.0

    @pytest.mark.parametrize("value", [-1, 2.5])
    def test_domain(self, value) -> None:
        with pytest.raises(InvalidInputError, match="non-negative integer"):
            factorial(value)

    def test_overflow(self) -> None:
        assert factorial(170) > 0
        with pytest.raises(NumberRangeError):
            factorial(171)


class TestReciprocal:
    """Тесты для reciprocal"""

    def test_reciprocal(self) -> None:
        assert reciprocal(4) == 0.25
        assert reciprocal(0.5) == 2.0

    def test_reciprocal_of_zero(self) -> None:
        with pytest.raises(DivisionByZeroError):
            reciprocal(0)


# =============================================================================
# ПРОЦЕНТЫ И АГРЕГАТЫ
# =============================================================================


class TestAggregates:
    """Тесты для percentage / total / average / percentage_change"""

    def test_percentage(self) -> None:
        assert percentage(25) == 0.25
        assert percentage(0.5) == 0.005

    def test_total_is_exact(self) -> None:
        assert total([0.1, 0.2, 0.3]) == 0.6
        assert total(x for x in (1, 2, 3)) == 6.0

    def test_average(self) -> None:
        assert average([1, 2, 3, 4]) == 2.5
        assert average([0.1, 0.2]) == 0.15

    def test_empty_sequence(self) -> None:
        with pytest.raises(InvalidInputError, match="non-empty"):
            total([])
        with pytest.raises(InvalidInputError, match="non-empty"):
            average([])

    def test_percentage_change(self) -> None:
        assert percentage_change(100, 110) == 10.0
        assert percentage_change(0.5, 0.25) == -50.0

    def test_percentage_change_from_zero(self) -> None:
        with pytest.raises(DivisionByZeroError):
            percentage_change(0, 10)


class TestCompoundInterest:
    """Тесты для compound_interest"""

    def test_annual(self) -> None:
        """1000 × 1.05² = 1102.5"""
        assert compound_interest(1000, 0.05, 2) == 1102.5

    def test_zero_rate(self) -> None:
        assert compound_interest(1000, 0, 10) == 1000.0

    def test_monthly(self) -> None:
        expected = 1000 * (1 + 0.12 / 12) ** 12
        assert compound_interest(1000, 0.12, 1, periods_per_year=12) == pytest.approx(expected)

    def test_invalid_periods(self) -> None:
        with pytest.raises(InvalidInputError):
            compound_interest(1000, 0.05, 2, periods_per_year=0)
