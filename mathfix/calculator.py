"""
Calculator — сборка арифметики, выражений и форматирования над слоем конфигурации

Каждый Calculator владеет:
- instance-слоем конфигурации (parent — переданный global-слой)
- LRU-кэшем результатов add / subtract / multiply / divide
- фабрикой цепочек (chain)

Параметры вызова, равные None, разрешаются через каскад
call → instance → global → default.

КЭШ:
    Ключ — "op:repr(a),repr(b)". Управляется performance.cache_enabled и
    performance.cache_size; исключения не кэшируются.
"""

import logging
from dataclasses import dataclass
from decimal import ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP
from typing import Any, Callable, Iterable, Mapping

from cachetools import LRUCache

from mathfix.chain import ChainableCalculator
from mathfix.core.config import ConfigCascade, ConfigLayer, UnitPosition
from mathfix.core.expression import ExpressionEvaluator, TokenKind
from mathfix.core.formatting import formatter, numerals
from mathfix.core.formatting.rounding import quantize, validate_precision
from mathfix.core.math import functions, scaled_arithmetic
from mathfix.core.math.scaled_arithmetic import to_float

logger = logging.getLogger(__name__)


# =============================================================================
# CACHE STATS
# =============================================================================


@dataclass
class CacheStats:
    """Счётчики обращений к кэшу операций."""

    hits: int = 0
    misses: int = 0

    @property
    def total_requests(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.hits / self.total_requests


# =============================================================================
# CALCULATOR
# =============================================================================


class Calculator:
    """
    Калькулятор с собственной конфигурацией и кэшем.

    Args:
        config: Начальные переопределения instance-слоя
        global_config: Слой, на который читает instance; None → новый
            изолированный global-слой

    Examples:
        >>> calc = Calculator({"precision": {"default": 2}})
        >>> calc.add(0.1, 0.2)
        0.3
        >>> calc.format(3.14159)
        3.14
    """

    def __init__(
        self,
        config: Mapping[str, Any] | None = None,
        global_config: ConfigLayer | None = None,
    ):
        self.global_config = global_config if global_config is not None else ConfigLayer("global")
        self.config = ConfigLayer("instance", parent=self.global_config)
        if config:
            self.config.set_config(config)

        self._cascade = ConfigCascade(self.config)
        self._cache: LRUCache = LRUCache(maxsize=self.config.get_config("performance.cache_size"))
        self._stats = CacheStats()

    def __repr__(self) -> str:
        return f"Calculator(config={self.config.overrides!r})"

    # =========================================================================
    # CONFIG
    # =========================================================================

    def set_config(self, partial: Mapping[str, Any], merge: bool = True) -> bool:
        """Переопределения instance-слоя (см. ConfigLayer.set_config)."""
        return self.config.set_config(partial, merge)

    def get_config(self, path: str | None = None, default: Any = None) -> Any:
        """Эффективное значение для этого калькулятора."""
        return self.config.get_config(path, default)

    def reset_config(self) -> bool:
        """Сброс instance-слоя: чтение снова идёт в global."""
        return self.config.reset_config()

    def _precision(self, path: str, precision: int | None) -> int:
        value = self._cascade.resolve(path, precision)
        return validate_precision(
            value,
            self.config.get_config("precision.min"),
            self.config.get_config("precision.max"),
        )

    # =========================================================================
    # CACHE
    # =========================================================================

    def _cached(self, operation: str, func: Callable[[object, object], float], a: object, b: object) -> float:
        if not self.config.get_config("performance.cache_enabled"):
            return func(a, b)

        maxsize = self.config.get_config("performance.cache_size")
        if self._cache.maxsize != maxsize:
            self._cache = LRUCache(maxsize=maxsize)

        key = f"{operation}:{a!r},{b!r}"
        result = self._cache.get(key)
        if result is not None:
            self._stats.hits += 1
            logger.debug("Cache HIT: %s (total hits=%d)", key, self._stats.hits)
            return result

        self._stats.misses += 1
        result = func(a, b)
        self._cache[key] = result
        return result

    def clear_cache(self) -> None:
        """Очистка кэша и счётчиков."""
        self._cache.clear()
        self._stats = CacheStats()

    def get_cache_stats(self) -> dict[str, Any]:
        """
        Статистика кэша.

        Returns:
            Dict с полями size, maxsize, hits, misses, hit_rate
        """
        return {
            "size": len(self._cache),
            "maxsize": self._cache.maxsize,
            "hits": self._stats.hits,
            "misses": self._stats.misses,
            "hit_rate": self._stats.hit_rate,
        }

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def add(self, a: object, b: object) -> float:
        return self._cached("add", scaled_arithmetic.add, a, b)

    def subtract(self, a: object, b: object) -> float:
        return self._cached("subtract", scaled_arithmetic.subtract, a, b)

    def multiply(self, a: object, b: object) -> float:
        return self._cached("multiply", scaled_arithmetic.multiply, a, b)

    def divide(self, a: object, b: object) -> float:
        return self._cached("divide", scaled_arithmetic.divide, a, b)

    def decimal_places(self, value: object) -> int:
        return scaled_arithmetic.decimal_places(value)

    # Производные функции не кэшируются
    square = staticmethod(functions.square)
    cube = staticmethod(functions.cube)
    power = staticmethod(functions.power)
    sqrt = staticmethod(functions.sqrt)
    cbrt = staticmethod(functions.cbrt)
    absolute = staticmethod(functions.absolute)
    log10 = staticmethod(functions.log10)
    ln = staticmethod(functions.ln)
    exp = staticmethod(functions.exp)
    factorial = staticmethod(functions.factorial)
    reciprocal = staticmethod(functions.reciprocal)
    percentage = staticmethod(functions.percentage)
    total = staticmethod(functions.total)
    average = staticmethod(functions.average)
    percentage_change = staticmethod(functions.percentage_change)
    compound_interest = staticmethod(functions.compound_interest)

    # =========================================================================
    # EXPRESSIONS
    # =========================================================================

    def _evaluator(self) -> ExpressionEvaluator:
        return ExpressionEvaluator(
            operations={
                TokenKind.PLUS: self.add,
                TokenKind.MINUS: self.subtract,
                TokenKind.STAR: self.multiply,
                TokenKind.SLASH: self.divide,
            },
            max_length=self.config.get_config("expression.max_length"),
        )

    def calculate(self, expression: str) -> float:
        """
        Вычисление выражения через кэшируемые операции.

        Examples:
            >>> Calculator().calculate("(0.1 + 0.2) * 3 - 0.5")
            0.4
        """
        return self._evaluator().calculate(expression)

    def calculate_batch(self, expressions: Iterable[str]) -> list[float | None]:
        """Пакетное вычисление; ошибочные элементы → None."""
        return self._evaluator().calculate_batch(
            expressions,
            log_failures=self.config.get_config("logging.log_batch_failures"),
        )

    # =========================================================================
    # ROUNDING
    # =========================================================================

    def round(self, value: object, precision: int = 0) -> float:
        return self._quantized(value, precision, ROUND_HALF_UP)

    def ceil(self, value: object, precision: int = 0) -> float:
        return self._quantized(value, precision, ROUND_CEILING)

    def floor(self, value: object, precision: int = 0) -> float:
        return self._quantized(value, precision, ROUND_FLOOR)

    def _quantized(self, value: object, precision: int, rounding: str) -> float:
        digits = self._precision("precision.default", precision)
        result = float(quantize(to_float(value), digits, rounding))
        return result if result else 0.0

    # =========================================================================
    # FORMATTING
    # =========================================================================

    def to_percent(
        self,
        value: object,
        precision: int | None = None,
        with_symbol: bool | None = None,
    ) -> str:
        return formatter.to_percent(
            value,
            self._precision("percent.precision", precision),
            self._cascade.resolve("percent.with_symbol", with_symbol),
        )

    def to_currency(
        self,
        value: object,
        symbol: str | None = None,
        precision: int | None = None,
        with_thousands: bool | None = None,
    ) -> str:
        """
        Examples:
            >>> Calculator().to_currency(-1234.5)
            '-¥1,234.50'
        """
        return formatter.to_currency(
            value,
            symbol=self._cascade.resolve("currency.symbol", symbol),
            precision=self._precision("currency.precision", precision),
            with_thousands=self._cascade.resolve("currency.with_thousands", with_thousands),
            thousands_separator=self.config.get_config("format.thousands_separator_char"),
            decimal_separator=self.config.get_config("format.decimal_separator"),
            symbol_position=UnitPosition(self.config.get_config("currency.symbol_position")),
        )

    def to_unit(self, value: object, unit: str, precision: int = 2) -> str:
        return formatter.to_unit(value, unit, self._precision("precision.default", precision))

    def to_readable(
        self,
        value: object,
        precision: int | None = None,
        locale: str | None = None,
    ) -> str:
        return formatter.to_readable(
            value,
            self._precision("readable.precision", precision),
            self._cascade.resolve("readable.locale", locale),
        )

    def to_scientific(self, value: object, precision: int | None = None) -> str:
        return formatter.to_scientific(value, self._precision("scientific.precision", precision))

    def to_fraction(self, value: object, max_denominator: int | None = None) -> str:
        return formatter.to_fraction(
            value,
            self._cascade.resolve("fraction.max_denominator", max_denominator),
        )

    def format(self, value: object, **options: Any) -> float | str:
        """
        Форматирование с разрешением опций через каскад.

        Args:
            value: Число
            **options: precision, thousands_separator, thousands_separator_char,
                decimal_separator, unit, unit_position, uppercase,
                chinese_number, chinese_capital

        Raises:
            ConfigurationError: Неизвестная опция
        """
        return formatter.format_number(value, self._cascade.format_options(**options))

    to_chinese_number = staticmethod(numerals.to_chinese_number)
    to_chinese_capital = staticmethod(numerals.to_chinese_capital)

    # =========================================================================
    # CHAIN
    # =========================================================================

    def chain(self, initial: object = 0) -> ChainableCalculator:
        """
        Цепочка вычислений над этим калькулятором.

        Examples:
            >>> Calculator().chain(0.1).add(0.2).multiply(3).value_of()
            0.9
        """
        return ChainableCalculator(self, initial)
