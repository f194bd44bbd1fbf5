"""
Numerals — запись чисел китайскими цифрами

Две формы:
- to_chinese_number: обычная запись (一百二十三点四五)
- to_chinese_capital: финансовая запись суммы в юанях (壹佰贰拾叁元肆角伍分)

Целая часть разбивается на группы по 4 цифры (万-группы):
    123456789 → [1][2345][6789] → 一亿 二千三百四十五万 六千七百八十九

ПРАВИЛА НУЛЕЙ:
1. Внутри группы серия нулей между значащими цифрами даёт один 零
   (1001 → 一千零一)
2. Группа < 1000 после старшей непустой группы начинается с 零
   (10001 → 一万零一)
3. Пустая группа (0000) между непустыми даёт один 零
   (100000001 → 一亿零一)
4. Хвостовые нули не читаются (1000000 → 一百万)
"""

from decimal import ROUND_HALF_UP
from typing import Final

from mathfix.core.formatting.rounding import quantize
from mathfix.core.math.scaled_arithmetic import canonical_decimal_string, to_float
from mathfix.errors import NumberRangeError

# =============================================================================
# ТАБЛИЦЫ
# =============================================================================

DIGITS: Final[str] = "零一二三四五六七八九"
UNITS: Final[tuple[str, ...]] = ("", "十", "百", "千")

CAPITAL_DIGITS: Final[str] = "零壹贰叁肆伍陆柒捌玖"
CAPITAL_UNITS: Final[tuple[str, ...]] = ("", "拾", "佰", "仟")

BIG_UNITS: Final[tuple[str, ...]] = ("", "万", "亿", "兆")

# Обычные цифры → финансовые (uppercase в format)
CAPITAL_TRANSLATION: Final[dict[int, str]] = str.maketrans(
    DIGITS[1:] + "".join(UNITS[1:]),
    CAPITAL_DIGITS[1:] + "".join(CAPITAL_UNITS[1:]),
)

# Границы поддерживаемого диапазона (не включительно)
CHINESE_NUMBER_LIMIT: Final[int] = 10**16
CHINESE_CAPITAL_LIMIT: Final[int] = 10**12

GROUP_SIZE: Final[int] = 10_000


# =============================================================================
# ГРУППЫ
# =============================================================================


def _convert_section(section: int, digits: str, units: tuple[str, ...]) -> str:
    """Запись группы 1..9999 без ведущего 零."""
    result = ""
    need_zero = False

    for position in range(3, -1, -1):
        digit = section // 10**position % 10
        if digit:
            if need_zero:
                result += digits[0]
                need_zero = False
            result += digits[digit] + units[position]
        elif result:
            need_zero = True

    return result


def convert_integer(number: int, digits: str = DIGITS, units: tuple[str, ...] = UNITS) -> str:
    """
    Запись неотрицательного целого группами по 4 цифры.

    Для 0 возвращает пустую строку: что писать вместо нуля, решает
    вызывающий код.

    Examples:
        >>> convert_integer(10001)
        '一万零一'
        >>> convert_integer(1000000, CAPITAL_DIGITS, CAPITAL_UNITS)
        '壹佰万'
    """
    if number < 0:
        raise ValueError(f"number must be non-negative, got {number}")

    sections: list[int] = []
    while number:
        number, section = divmod(number, GROUP_SIZE)
        sections.append(section)

    if len(sections) > len(BIG_UNITS):
        raise ValueError("number has more groups than known big units")

    result = ""
    need_zero = False
    for index in range(len(sections) - 1, -1, -1):
        section = sections[index]
        if not section:
            if result:
                need_zero = True
            continue

        if result and (need_zero or section < 1000):
            result += digits[0]
        result += _convert_section(section, digits, units) + BIG_UNITS[index]
        need_zero = False

    return result


# =============================================================================
# ОБЫЧНАЯ ЗАПИСЬ
# =============================================================================


def to_chinese_number(value: object, shorten_ten: bool = True) -> str:
    """
    Число китайскими цифрами.

    Дробные цифры читаются по одной после 点; ведущее 一十 сокращается до 十
    (shorten_ten=False сохраняет 一十 для перевода в финансовые цифры).

    Raises:
        InvalidInputError: Не конечное число
        NumberRangeError: |value| >= 10^16

    Examples:
        >>> to_chinese_number(123)
        '一百二十三'
        >>> to_chinese_number(-15.05)
        '负十五点零五'
    """
    number = to_float(value)
    if abs(number) >= CHINESE_NUMBER_LIMIT:
        raise NumberRangeError("value", number, max_value=CHINESE_NUMBER_LIMIT)
    if number == 0:
        return DIGITS[0]

    integer_text, _, fraction_text = canonical_decimal_string(abs(number)).partition(".")

    result = convert_integer(int(integer_text)) or DIGITS[0]
    if shorten_ten and result.startswith(DIGITS[1] + UNITS[1]):
        result = result[1:]

    if fraction_text:
        result += "点" + "".join(DIGITS[int(digit)] for digit in fraction_text)

    return "负" + result if number < 0 else result


def to_capital_digits(text: str) -> str:
    """Замена обычных цифр и разрядов финансовыми: 一百二十 → 壹佰贰拾."""
    return text.translate(CAPITAL_TRANSLATION)


# =============================================================================
# ФИНАНСОВАЯ ЗАПИСЬ (RMB)
# =============================================================================


def to_chinese_capital(value: object) -> str:
    """
    Сумма прописью финансовыми цифрами.

    Значение округляется half-up до фэней (2 знака). Целая сумма
    получает суффикс 整; 角 без 分 пишется без 整; 分 без 角 предваряется 零.

    Raises:
        InvalidInputError: Не конечное число
        NumberRangeError: Целая часть >= 10^12

    Examples:
        >>> to_chinese_capital(0)
        '零元整'
        >>> to_chinese_capital(1000000)
        '壹佰万元整'
        >>> to_chinese_capital(1234.56)
        '壹仟贰佰叁拾肆元伍角陆分'
        >>> to_chinese_capital(100.05)
        '壹佰元零伍分'
    """
    number = to_float(value)
    amount = quantize(abs(number), 2, ROUND_HALF_UP)
    integer_part = int(amount)
    if integer_part >= CHINESE_CAPITAL_LIMIT:
        raise NumberRangeError("value", number, max_value=CHINESE_CAPITAL_LIMIT)

    cents = int((amount - integer_part) * 100)
    if not integer_part and not cents:
        return "零元整"

    jiao, fen = divmod(cents, 10)

    result = convert_integer(integer_part, CAPITAL_DIGITS, CAPITAL_UNITS) or CAPITAL_DIGITS[0]
    result += "元"

    if not jiao and not fen:
        result += "整"
    else:
        if jiao:
            result += CAPITAL_DIGITS[jiao] + "角"
        else:
            result += CAPITAL_DIGITS[0]
        if fen:
            result += CAPITAL_DIGITS[fen] + "分"

    # Знак только у ненулевой суммы после округления до фэней
    return "负" + result if number < 0 else result
