"""
Formatter — форматирование чисел для отображения

Все функции чистые: эффективные параметры приходят аргументами (их
разрешает ConfigCascade в Calculator). Числа предварительно округляются
через rounding (Decimal quantize), строки строятся из канонической
десятичной записи, поэтому экспоненциальная запись не появляется нигде,
кроме to_scientific.

Форматы:
- to_percent:    0.1234 → "12.34%"
- to_currency:   -1234.5 → "-¥1,234.50"
- to_unit:       123.456, "kg" → "123.46kg"
- to_readable:   1234567 → "123.5万" / "1.2M"
- to_scientific: 123456 → "1.23e+5"
- to_fraction:   1.25 → "1 1/4"
- format:        сводное форматирование по FormatOptions
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Final

from mathfix.core.config.options import FormatOptions, UnitPosition
from mathfix.core.formatting.numerals import (
    to_capital_digits,
    to_chinese_capital,
    to_chinese_number,
)
from mathfix.core.formatting.rounding import quantize, round_to, validate_precision
from mathfix.core.math.functions import SIGNIFICANT_DIGITS, to_significant
from mathfix.core.math.scaled_arithmetic import (
    canonical_decimal_string,
    divide,
    multiply,
    subtract,
    to_float,
)
from mathfix.errors import InvalidInputError

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Лестницы единиц для to_readable: (порог, символ), от старшей к младшей
READABLE_UNITS: Final[dict[str, tuple[tuple[int, str], ...]]] = {
    "zh": ((10**12, "万亿"), (10**8, "亿"), (10**4, "万")),
    "en": ((10**12, "T"), (10**9, "B"), (10**6, "M"), (10**3, "K")),
}

_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")


# =============================================================================
# HELPERS
# =============================================================================


def number_to_string(value: object) -> str:
    """
    Отображение числа: целые без ".0", без экспоненты.

    Examples:
        >>> number_to_string(3.0)
        '3'
        >>> number_to_string(0.30000000000000004)
        '0.30000000000000004'
    """
    return canonical_decimal_string(value)


def group_thousands(digits: str, separator: str = ",") -> str:
    """Разделение целой части на группы по 3 цифры: "1234567" → "1,234,567"."""
    return _THOUSANDS.sub(separator, digits)


def _compose(
    text: str,
    thousands_separator: str | None,
    decimal_separator: str,
) -> str:
    # text: беззнаковая десятичная запись
    integer_part, dot, fraction_part = text.partition(".")
    if thousands_separator:
        integer_part = group_thousands(integer_part, thousands_separator)
    if dot:
        return integer_part + decimal_separator + fraction_part
    return integer_part


def _attach_unit(text: str, unit: str, position: UnitPosition) -> str:
    if not unit:
        return text
    if position is UnitPosition.PREFIX:
        return unit + text
    return text + unit


# =============================================================================
# ПРОЦЕНТЫ, ВАЛЮТА, ЕДИНИЦЫ
# =============================================================================


def to_percent(value: object, precision: int = 2, with_symbol: bool = True) -> str:
    """
    Доля в проценты.

    Examples:
        >>> to_percent(0.12345)
        '12.35%'
        >>> to_percent(0.5, 0, with_symbol=False)
        '50'
    """
    percent = round_to(multiply(value, 100), precision)
    text = number_to_string(percent)
    return text + "%" if with_symbol else text


def to_currency(
    value: object,
    symbol: str = "¥",
    precision: int = 2,
    with_thousands: bool = True,
    thousands_separator: str = ",",
    decimal_separator: str = ".",
    symbol_position: UnitPosition = UnitPosition.PREFIX,
) -> str:
    """
    Денежная сумма с фиксированным числом знаков.

    Знак стоит перед символом валюты: "-¥1,234.50".

    Examples:
        >>> to_currency(1234.5)
        '¥1,234.50'
        >>> to_currency(-1234.5, "$")
        '-$1,234.50'
        >>> to_currency(1234.5, "€", symbol_position=UnitPosition.SUFFIX)
        '1,234.50€'
    """
    amount = quantize(to_float(value), precision, ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""

    text = _compose(
        format(abs(amount), "f"),
        thousands_separator if with_thousands else None,
        decimal_separator,
    )
    return sign + _attach_unit(text, symbol, UnitPosition(symbol_position))


def to_unit(value: object, unit: str, precision: int = 2) -> str:
    """
    Округлённое число с единицей измерения.

    Examples:
        >>> to_unit(123.456, "kg")
        '123.46kg'
    """
    return number_to_string(round_to(value, precision)) + unit


def to_readable(value: object, precision: int = 1, locale: str = "zh") -> str:
    """
    Крупное число с единицей масштаба.

    Выбирается старший порог, не превышающий |value|; ниже младшего
    порога возвращается просто округлённое значение.

    Raises:
        InvalidInputError: Неизвестная локаль

    Examples:
        >>> to_readable(1234567)
        '123.5万'
        >>> to_readable(1234567, 2, "en")
        '1.23M'
        >>> to_readable(-999, locale="en")
        '-999'
    """
    if locale not in READABLE_UNITS:
        raise InvalidInputError("locale", locale, f"one of {sorted(READABLE_UNITS)}")

    number = to_float(value)
    magnitude = abs(number)

    scaled, suffix = magnitude, ""
    for threshold, symbol in READABLE_UNITS[locale]:
        if magnitude >= threshold:
            scaled, suffix = divide(magnitude, threshold), symbol
            break

    rounded = round_to(scaled, precision)
    sign = "-" if number < 0 and rounded else ""
    return f"{sign}{number_to_string(rounded)}{suffix}"


def to_scientific(value: object, precision: int = 2) -> str:
    """
    Экспоненциальная запись: мантисса с precision знаками, порядок без
    ведущих нулей.

    Examples:
        >>> to_scientific(123456)
        '1.23e+5'
        >>> to_scientific(0.000123, 1)
        '1.2e-4'
    """
    validate_precision(precision)
    number = to_float(value)

    if number == 0:
        return f"{0:.{precision}f}e+0"

    text = canonical_decimal_string(number)
    step = Decimal(1).scaleb(-precision)

    with localcontext() as ctx:
        ctx.prec = len(text) + precision + 2
        decimal_value = Decimal(text)
        exponent = decimal_value.adjusted()
        mantissa = decimal_value.scaleb(-exponent).quantize(step, rounding=ROUND_HALF_UP)

        # 9.996 → 10.00: переносим разряд в порядок
        if abs(mantissa) >= 10:
            exponent += 1
            mantissa = mantissa.scaleb(-1).quantize(step, rounding=ROUND_HALF_UP)

    return f"{format(mantissa, 'f')}e{exponent:+d}"


def to_fraction(value: object, max_denominator: int = 100) -> str:
    """
    Приближение простой дробью.

    Перебор знаменателей 2..max_denominator; при равной погрешности
    побеждает меньший знаменатель. Результат сокращается по НОД.

    Raises:
        InvalidInputError: max_denominator < 1

    Examples:
        >>> to_fraction(0.5)
        '1/2'
        >>> to_fraction(1.25)
        '1 1/4'
        >>> to_fraction(-0.333)
        '-1/3'
    """
    if isinstance(max_denominator, bool) or not isinstance(max_denominator, int) or max_denominator < 1:
        raise InvalidInputError("max_denominator", max_denominator, "positive integer")

    number = to_float(value)
    sign = "-" if number < 0 else ""
    magnitude = abs(number)

    integer_part = math.floor(magnitude)
    fractional = subtract(magnitude, integer_part)
    if fractional == 0:
        return f"{sign}{integer_part}" if integer_part else "0"

    # Старт: ближайшее из 0/1 и 1/1 (половина округляется вверх)
    best_numerator, best_denominator = (0 if fractional < 0.5 else 1), 1
    best_error = abs(fractional - best_numerator)
    for denominator in range(2, max_denominator + 1):
        numerator = round_to(multiply(fractional, denominator))
        error = abs(fractional - numerator / denominator)
        if error < best_error:
            best_numerator, best_denominator, best_error = int(numerator), denominator, error

    # Дробь выродилась в целое: 0/d или d/d
    if best_numerator == 0:
        return f"{sign}{integer_part}" if integer_part else "0"
    if best_numerator == best_denominator:
        return f"{sign}{integer_part + 1}"

    divisor = math.gcd(best_numerator, best_denominator)
    fraction = f"{best_numerator // divisor}/{best_denominator // divisor}"

    if integer_part:
        return f"{sign}{integer_part} {fraction}"
    return sign + fraction


# =============================================================================
# СВОДНОЕ ФОРМАТИРОВАНИЕ
# =============================================================================


def format_number(value: object, options: FormatOptions | None = None) -> float | str:
    """
    Форматирование по эффективным опциям.

    Порядок:
    1. Нормализация до SIGNIFICANT_DIGITS значащих цифр
    2. Округление до options.precision
    3. chinese_capital → сумма прописью
    4. chinese_number → китайские цифры (+ uppercase → финансовые) + unit
    5. Иначе: разделители, uppercase, unit

    Если строковое форматирование не требуется, возвращается float.

    Examples:
        >>> format_number(0.1 + 0.2)
        0.3
        >>> format_number(1234.5678, FormatOptions(precision=2, thousands_separator=True))
        '1,234.57'
        >>> format_number(123, FormatOptions(chinese_number=True, uppercase=True))
        '壹佰贰拾叁'
    """
    options = options or FormatOptions()
    result = round_to(to_significant(to_float(value), SIGNIFICANT_DIGITS), options.precision)

    if options.chinese_capital:
        return to_chinese_capital(result)

    if options.chinese_number:
        if options.uppercase:
            text = to_capital_digits(to_chinese_number(result, shorten_ten=False))
        else:
            text = to_chinese_number(result)
        return _attach_unit(text, options.unit, options.unit_position)

    if not (options.thousands_separator or options.unit or options.uppercase):
        return result

    sign = "-" if result < 0 else ""
    text = sign + _compose(
        number_to_string(abs(result)),
        options.thousands_separator_char if options.thousands_separator else None,
        options.decimal_separator,
    )
    if options.uppercase:
        text = text.upper()
    return _attach_unit(text, options.unit, options.unit_position)
