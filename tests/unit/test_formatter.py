"""
Тесты для Formatter и Rounding

Проверяет:
1. Округление half-up / ceil / floor над десятичной записью
2. Валидацию precision
3. Проценты, валюту, единицы
4. Крупные числа (to_readable) и экспоненциальную запись
5. Приближение дробью
6. Сводное форматирование (format_number) и FormatOptions
"""

import math

import pytest
from pydantic import ValidationError

from mathfix.core.config import FormatOptions, UnitPosition
from mathfix.core.formatting import (
    ceil_to,
    floor_to,
    format_number,
    group_thousands,
    number_to_string,
    round_to,
    to_currency,
    to_fraction,
    to_percent,
    to_readable,
    to_scientific,
    to_unit,
)
from mathfix.errors import InvalidInputError, NumberRangeError

# =============================================================================
# ROUNDING
# =============================================================================


class TestRounding:
    """Тесты для round_to / ceil_to / floor_to"""

    def test_half_up_on_decimal_value(self) -> None:
        """1.005 округляется как десятичное 1.005, а не как 1.00499999..."""
        assert round_to(1.005, 2) == 1.01
        assert round_to(1234.5678, 2) == 1234.57

    def test_half_away_from_zero(self) -> None:
        assert round_to(2.5) == 3.0
        assert round_to(-2.5) == -3.0
        assert round_to(123.456) == 123.0

    def test_ceil(self) -> None:
        assert ceil_to(1.231, 2) == 1.24
        assert ceil_to(-1.239, 2) == -1.23
        assert ceil_to(1.2) == 2.0

    def test_floor(self) -> None:
        assert floor_to(-1.231, 2) == -1.24
        assert floor_to(1.999, 2) == 1.99
        assert floor_to(1.8) == 1.0

    def test_no_negative_zero(self) -> None:
        result = ceil_to(-0.5)
        assert result == 0.0
        assert math.copysign(1, result) == 1

    @pytest.mark.parametrize("precision", [-1, 101])
    def test_precision_out_of_range(self, precision) -> None:
        with pytest.raises(NumberRangeError, match="precision"):
            round_to(1.5, precision)

    @pytest.mark.parametrize("precision", [1.5, "2", True])
    def test_precision_not_integer(self, precision) -> None:
        with pytest.raises(InvalidInputError, match="whole number"):
            round_to(1.5, precision)

    def test_precision_upper_bound_accepted(self) -> None:
        assert round_to(0.1, 100) == 0.1


# =============================================================================
# HELPERS
# =============================================================================


class TestHelpers:
    """Тесты для number_to_string / group_thousands"""

    def test_number_to_string(self) -> None:
        assert number_to_string(3.0) == "3"
        assert number_to_string(0.3) == "0.3"
        assert number_to_string(-0.5) == "-0.5"
        assert number_to_string(1e21) == "1000000000000000000000"

    def test_group_thousands(self) -> None:
        assert group_thousands("1234567") == "1,234,567"
        assert group_thousands("123") == "123"
        assert group_thousands("1234567", " ") == "1 234 567"


# =============================================================================
# PERCENT / CURRENCY / UNIT
# =============================================================================


class TestPercent:
    """Тесты для to_percent"""

    def test_default(self) -> None:
        assert to_percent(0.12345) == "12.35%"
        assert to_percent(0.5) == "50%"

    def test_without_symbol(self) -> None:
        assert to_percent(0.5, 0, with_symbol=False) == "50"

    def test_small_fraction(self) -> None:
        assert to_percent(0.001234, 3) == "0.123%"


class TestCurrency:
    """Тесты для to_currency"""

    def test_default(self) -> None:
        assert to_currency(1234.5) == "¥1,234.50"

    def test_sign_before_symbol(self) -> None:
        assert to_currency(-1234.5, "$") == "-$1,234.50"

    def test_without_thousands(self) -> None:
        assert to_currency(1234.5, with_thousands=False) == "¥1234.50"

    def test_zero_precision(self) -> None:
        assert to_currency(1234.5, precision=0) == "¥1,235"

    def test_zero_and_negative_zero(self) -> None:
        assert to_currency(0) == "¥0.00"
        assert to_currency(-0.001) == "¥0.00"

    def test_custom_separators(self) -> None:
        result = to_currency(
            1234567.891, "€", 2, True, thousands_separator=".", decimal_separator=","
        )
        assert result == "€1.234.567,89"

    def test_suffix_symbol(self) -> None:
        result = to_currency(1234.5, "€", symbol_position=UnitPosition.SUFFIX)
        assert result == "1,234.50€"


class TestUnit:
    """Тесты для to_unit"""

    def test_unit(self) -> None:
        assert to_unit(123.456, "kg") == "123.46kg"
        assert to_unit(3.14159, "m", 1) == "3.1m"
        assert to_unit(2, "pcs") == "2pcs"


# =============================================================================
# READABLE / SCIENTIFIC
# =============================================================================


class TestReadable:
    """Тесты для to_readable"""

    @pytest.mark.parametrize(
        "value, precision, locale, expected",
        [
            (1234567, 1, "zh", "123.5万"),
            (2.5e8, 1, "zh", "2.5亿"),
            (1e12, 1, "zh", "1万亿"),
            (-12345, 1, "zh", "-1.2万"),
            (5000, 1, "zh", "5000"),
            (1234567, 2, "en", "1.23M"),
            (1.5e12, 1, "en", "1.5T"),
            (2500, 1, "en", "2.5K"),
            (3.2e9, 1, "en", "3.2B"),
            (999, 1, "en", "999"),
        ],
    )
    def test_ladder(self, value, precision, locale, expected) -> None:
        """Выбирается старший порог, не превышающий |value|"""
        assert to_readable(value, precision, locale) == expected

    @pytest.mark.parametrize(
        "value, locale, expected",
        [(-0.04, "zh", "0"), (-0.04, "en", "0"), (-0.06, "en", "-0.1")],
    )
    def test_sign_from_rounded_value(self, value, locale, expected) -> None:
        """Значение, округлившееся до нуля, выводится без минуса"""
        assert to_readable(value, 1, locale) == expected

    def test_unknown_locale(self) -> None:
        with pytest.raises(InvalidInputError, match="locale"):
            to_readable(1000, locale="fr")


class TestScientific:
    """Тесты для to_scientific"""

    @pytest.mark.parametrize(
        "value, precision, expected",
        [
            (123456, 2, "1.23e+5"),
            (0.000123, 1, "1.2e-4"),
            (-123456, 2, "-1.23e+5"),
            (0, 2, "0.00e+0"),
            (9.996, 2, "1.00e+1"),
            (123456, 0, "1e+5"),
            (1.005, 2, "1.01e+0"),
            (5, 2, "5.00e+0"),
        ],
    )
    def test_format(self, value, precision, expected) -> None:
        assert to_scientific(value, precision) == expected


# =============================================================================
# FRACTION
# =============================================================================


class TestFraction:
    """Тесты для to_fraction"""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0.5, "1/2"),
            (1.25, "1 1/4"),
            (0.75, "3/4"),
            (2.5, "2 1/2"),
            (-0.333, "-1/3"),
            (-1.5, "-1 1/2"),
            (0.3333, "1/3"),
        ],
    )
    def test_fractions(self, value, expected) -> None:
        assert to_fraction(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [(0, "0"), (3, "3"), (-2.0, "-2"), (0.999, "1"), (2.0001, "2")],
    )
    def test_whole_numbers(self, value, expected) -> None:
        """Дробь, выродившаяся в 0/d или d/d, даёт целое"""
        assert to_fraction(value) == expected

    def test_max_denominator_limits_search(self) -> None:
        assert to_fraction(0.3333, 2) == "1/2"

    @pytest.mark.parametrize(
        "value, expected",
        [(1.2, "1"), (1.7, "2"), (0.4, "0"), (-1.2, "-1"), (2.5, "3")],
    )
    def test_denominator_one_rounds_to_nearest(self, value, expected) -> None:
        """max_denominator=1: ближайшее целое, половина вверх"""
        assert to_fraction(value, 1) == expected

    def test_invalid_max_denominator(self) -> None:
        with pytest.raises(InvalidInputError):
            to_fraction(0.5, 0)


# =============================================================================
# FORMAT
# =============================================================================


class TestFormatNumber:
    """Тесты для format_number"""

    def test_plain_returns_float(self) -> None:
        result = format_number(0.1 + 0.2)
        assert result == 0.3
        assert isinstance(result, float)

    def test_precision(self) -> None:
        assert format_number(3.14159, FormatOptions(precision=2)) == 3.14

    def test_thousands_separator(self) -> None:
        options = FormatOptions(precision=2, thousands_separator=True)
        assert format_number(1234.5678, options) == "1,234.57"
        assert format_number(-1234567.5, options) == "-1,234,567.5"

    def test_custom_separators(self) -> None:
        options = FormatOptions(
            thousands_separator=True, thousands_separator_char=".", decimal_separator=","
        )
        assert format_number(1234.5, options) == "1.234,5"

    def test_unit_suffix_and_prefix(self) -> None:
        assert format_number(1234.5, FormatOptions(unit="元")) == "1234.5元"
        options = FormatOptions(precision=2, unit="$", unit_position=UnitPosition.PREFIX)
        assert format_number(12.345, options) == "$12.35"

    def test_chinese_number(self) -> None:
        assert format_number(123, FormatOptions(chinese_number=True)) == "一百二十三"
        assert format_number(12, FormatOptions(chinese_number=True, unit="个")) == "十二个"

    def test_chinese_number_uppercase(self) -> None:
        options = FormatOptions(chinese_number=True, uppercase=True)
        assert format_number(123, options) == "壹佰贰拾叁"

    def test_chinese_number_uppercase_keeps_leading_one(self) -> None:
        """Финансовая запись не сокращает 壹拾"""
        options = FormatOptions(chinese_number=True, uppercase=True)
        assert format_number(15, options) == "壹拾伍"
        assert format_number(15, FormatOptions(chinese_number=True)) == "十五"

    def test_chinese_capital_has_priority(self) -> None:
        options = FormatOptions(chinese_capital=True, chinese_number=True, unit="kg")
        assert format_number(1234.56, options) == "壹仟贰佰叁拾肆元伍角陆分"

    def test_chinese_capital_rounds_to_fen(self) -> None:
        assert format_number(1234.567, FormatOptions(chinese_capital=True)) == "壹仟贰佰叁拾肆元伍角柒分"


class TestFormatOptions:
    """Тесты для модели FormatOptions"""

    def test_defaults(self) -> None:
        options = FormatOptions()
        assert options.precision == 10
        assert options.unit_position is UnitPosition.SUFFIX
        assert options.thousands_separator_char == ","

    def test_precision_bounds(self) -> None:
        with pytest.raises(ValidationError):
            FormatOptions(precision=101)
        with pytest.raises(ValidationError):
            FormatOptions(precision=-1)

    def test_separators_must_differ(self) -> None:
        with pytest.raises(ValidationError, match="must differ"):
            FormatOptions(thousands_separator_char=",", decimal_separator=",")

    def test_unit_position_from_string(self) -> None:
        assert FormatOptions(unit_position="prefix").unit_position is UnitPosition.PREFIX

    def test_frozen(self) -> None:
        options = FormatOptions()
        with pytest.raises(ValidationError):
            options.precision = 2
