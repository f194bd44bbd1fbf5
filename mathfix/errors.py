"""
Errors — Иерархия исключений mathfix

Все ошибки библиотеки наследуются от MathFixError и несут машиночитаемый
code и словарь details. Дополнительно каждое исключение наследует
подходящий встроенный тип (ValueError / ZeroDivisionError), чтобы вызывающий
код мог ловить их привычным образом.

Политика распространения:
- Арифметика, конвертация чисел и выражения падают сразу (fail fast)
- calculate_batch — единственное место с частичным восстановлением
"""

from typing import Any


# =============================================================================
# BASE
# =============================================================================


class MathFixError(Exception):
    """
    Базовое исключение mathfix.

    Args:
        message: Человекочитаемое описание
        code: Машиночитаемый код ошибки
        details: Контекст ошибки (операнды, путь конфигурации и т.п.)
    """

    code: str = "MATHFIX_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Сериализация ошибки в dict (для логов и API-ответов)."""
        return {
            "error": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


# =============================================================================
# ARITHMETIC
# =============================================================================


class DivisionByZeroError(MathFixError, ZeroDivisionError):
    """Деление на ноль в divide / reciprocal / выражении."""

    code = "DIVISION_BY_ZERO"

    def __init__(self, dividend: Any = None):
        super().__init__("Division by zero", {"dividend": dividend})


class InvalidInputError(MathFixError, ValueError):
    """Аргумент не является конечным числом или вне области определения."""

    code = "INVALID_INPUT"

    def __init__(self, param_name: str, value: Any, expected: str = "finite number"):
        super().__init__(
            f"{param_name} must be a {expected}, got {value!r}",
            {"param": param_name, "value": value, "expected": expected},
        )


class NumberRangeError(MathFixError, ValueError):
    """Значение вне поддерживаемого диапазона (конвертация чисел, precision)."""

    code = "NUMBER_RANGE"

    def __init__(
        self,
        param_name: str,
        value: Any,
        min_value: Any = None,
        max_value: Any = None,
    ):
        message = f"{param_name}={value!r} is out of supported range"
        if min_value is not None and max_value is not None:
            message += f" (min: {min_value}, max: {max_value})"
        elif min_value is not None:
            message += f" (min: {min_value})"
        elif max_value is not None:
            message += f" (max: {max_value})"

        super().__init__(
            message,
            {"param": param_name, "value": value, "min": min_value, "max": max_value},
        )


# =============================================================================
# EXPRESSIONS
# =============================================================================


class InvalidExpressionError(MathFixError, ValueError):
    """Выражение не сводится к одному числу."""

    code = "INVALID_EXPRESSION"

    def __init__(self, expression: str, reason: str, position: int | None = None):
        message = f"Invalid expression {expression!r}: {reason}"
        if position is not None:
            message += f" (position {position})"

        super().__init__(
            message,
            {"expression": expression, "reason": reason, "position": position},
        )


class UnbalancedParenthesesError(InvalidExpressionError):
    """Непарная '(' или ')' в выражении."""

    code = "UNBALANCED_PARENTHESES"


# =============================================================================
# CONFIGURATION
# =============================================================================


class ConfigurationError(MathFixError, ValueError):
    """Некорректный payload конфигурации или неизвестная опция вызова."""

    code = "CONFIGURATION_ERROR"

    def __init__(self, message: str, path: str | None = None, value: Any = None):
        super().__init__(message, {"path": path, "value": value})
