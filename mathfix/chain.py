"""
ChainableCalculator — цепочка вычислений над одним значением

Арифметические методы изменяют текущее значение и возвращают self:

    chain(0.1).add(0.2).multiply(3).round(2).value_of()  # 0.9

Форматирующие методы терминальные: возвращают строку и значение не
меняют. Объект изменяемый и не потокобезопасный: одна цепочка — один
поток.
"""

from typing import TYPE_CHECKING, Any

from mathfix.core.formatting import number_to_string
from mathfix.core.math.scaled_arithmetic import to_float

if TYPE_CHECKING:
    from mathfix.calculator import Calculator


class ChainableCalculator:
    """
    Накопитель значения, привязанный к Calculator.

    Args:
        calculator: Калькулятор, через который идут операции и форматирование
        value: Начальное значение
    """

    def __init__(self, calculator: "Calculator", value: object = 0):
        self.calculator = calculator
        self.value = to_float(value)

    def __repr__(self) -> str:
        return f"ChainableCalculator(value={self.value!r})"

    def __str__(self) -> str:
        return number_to_string(self.value)

    def __float__(self) -> float:
        return self.value

    # =========================================================================
    # ARITHMETIC (mutating)
    # =========================================================================

    def add(self, other: object) -> "ChainableCalculator":
        self.value = self.calculator.add(self.value, other)
        return self

    def subtract(self, other: object) -> "ChainableCalculator":
        self.value = self.calculator.subtract(self.value, other)
        return self

    def multiply(self, other: object) -> "ChainableCalculator":
        self.value = self.calculator.multiply(self.value, other)
        return self

    def divide(self, other: object) -> "ChainableCalculator":
        self.value = self.calculator.divide(self.value, other)
        return self

    def square(self) -> "ChainableCalculator":
        self.value = self.calculator.square(self.value)
        return self

    def cube(self) -> "ChainableCalculator":
        self.value = self.calculator.cube(self.value)
        return self

    def power(self, exponent: object) -> "ChainableCalculator":
        self.value = self.calculator.power(self.value, exponent)
        return self

    def sqrt(self) -> "ChainableCalculator":
        self.value = self.calculator.sqrt(self.value)
        return self

    def cbrt(self) -> "ChainableCalculator":
        self.value = self.calculator.cbrt(self.value)
        return self

    def absolute(self) -> "ChainableCalculator":
        self.value = self.calculator.absolute(self.value)
        return self

    def reciprocal(self) -> "ChainableCalculator":
        self.value = self.calculator.reciprocal(self.value)
        return self

    def percentage(self) -> "ChainableCalculator":
        """Перевод процентов в долю: chain(25).percentage() → 0.25."""
        self.value = self.calculator.percentage(self.value)
        return self

    def round(self, precision: int = 0) -> "ChainableCalculator":
        self.value = self.calculator.round(self.value, precision)
        return self

    def ceil(self, precision: int = 0) -> "ChainableCalculator":
        self.value = self.calculator.ceil(self.value, precision)
        return self

    def floor(self, precision: int = 0) -> "ChainableCalculator":
        self.value = self.calculator.floor(self.value, precision)
        return self

    # =========================================================================
    # FORMATTING (terminal)
    # =========================================================================

    def to_percent(self, precision: int | None = None, with_symbol: bool | None = None) -> str:
        return self.calculator.to_percent(self.value, precision, with_symbol)

    def to_currency(
        self,
        symbol: str | None = None,
        precision: int | None = None,
        with_thousands: bool | None = None,
    ) -> str:
        return self.calculator.to_currency(self.value, symbol, precision, with_thousands)

    def to_unit(self, unit: str, precision: int = 2) -> str:
        return self.calculator.to_unit(self.value, unit, precision)

    def to_readable(self, precision: int | None = None, locale: str | None = None) -> str:
        return self.calculator.to_readable(self.value, precision, locale)

    def to_scientific(self, precision: int | None = None) -> str:
        return self.calculator.to_scientific(self.value, precision)

    def to_fraction(self, max_denominator: int | None = None) -> str:
        return self.calculator.to_fraction(self.value, max_denominator)

    def format(self, **options: Any) -> float | str:
        return self.calculator.format(self.value, **options)

    def to_chinese_number(self) -> str:
        return self.calculator.to_chinese_number(self.value)

    def to_chinese_capital(self) -> str:
        return self.calculator.to_chinese_capital(self.value)

    # =========================================================================
    # READS
    # =========================================================================

    def value_of(self) -> float:
        """Текущее значение."""
        return self.value

    def to_string(self) -> str:
        return str(self)

    def reset(self, value: object = 0) -> "ChainableCalculator":
        """Новое начальное значение для повторного использования цепочки."""
        self.value = to_float(value)
        return self
