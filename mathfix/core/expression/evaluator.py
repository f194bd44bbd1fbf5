"""
Expression Evaluator — вычисление арифметических выражений

Грамматика (recursive descent):
    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/') factor)*
    factor     := ('-' | '+') factor | NUMBER | '(' expression ')'

Семантика:
- '*' и '/' связывают сильнее '+' и '-', операции одного приоритета
  левоассоциативны
- Унарный минус в начале, после '(' или после оператора отрицает следующий
  операнд: -x вычисляется как 0 - x
- Каждая редукция выполняется через scaled arithmetic (0.1 + 0.2 == 0.3)

Ошибки:
- Непарная скобка → UnbalancedParenthesesError
- Любая другая синтаксическая ошибка → InvalidExpressionError
- Деление на ноль → DivisionByZeroError

calculate_batch — единственное место с частичным восстановлением: ошибочный
элемент превращается в None, остальные вычисляются.
"""

import logging
import math
from typing import Callable, Final, Iterable, Mapping

from mathfix.core.expression.tokenizer import Token, TokenKind, tokenize
from mathfix.core.math.scaled_arithmetic import add, divide, multiply, subtract
from mathfix.errors import (
    InvalidExpressionError,
    MathFixError,
    UnbalancedParenthesesError,
)

logger = logging.getLogger(__name__)

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Максимальная глубина вложенности скобок и унарных операторов
MAX_NESTING_DEPTH: Final[int] = 100

# Максимальная длина выражения по умолчанию
DEFAULT_MAX_LENGTH: Final[int] = 1000

BinaryOperation = Callable[[object, object], float]

DEFAULT_OPERATIONS: Final[Mapping[TokenKind, BinaryOperation]] = {
    TokenKind.PLUS: add,
    TokenKind.MINUS: subtract,
    TokenKind.STAR: multiply,
    TokenKind.SLASH: divide,
}


# =============================================================================
# PARSER
# =============================================================================


class _Parser:
    """Одноразовый парсер над списком токенов одного выражения."""

    def __init__(
        self,
        expression: str,
        tokens: list[Token],
        operations: Mapping[TokenKind, BinaryOperation],
    ):
        self.expression = expression
        self.tokens = tokens
        self.operations = operations
        self.pos = 0
        self.depth = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def parse(self) -> float:
        self.check_balance()
        value = self.parse_expression()

        token = self.current
        if token.kind is not TokenKind.END:
            raise InvalidExpressionError(
                self.expression, f"unexpected token {token.text!r}", token.position
            )
        return value

    def check_balance(self) -> None:
        """Парность скобок проверяется до вычисления."""
        open_positions: list[int] = []
        for token in self.tokens:
            if token.kind is TokenKind.LPAREN:
                open_positions.append(token.position)
            elif token.kind is TokenKind.RPAREN:
                if not open_positions:
                    raise UnbalancedParenthesesError(
                        self.expression, "unmatched ')'", token.position
                    )
                open_positions.pop()

        if open_positions:
            raise UnbalancedParenthesesError(self.expression, "unmatched '('", open_positions[-1])

    def parse_expression(self) -> float:
        left = self.parse_term()
        while self.current.kind in (TokenKind.PLUS, TokenKind.MINUS):
            operator = self.advance()
            right = self.parse_term()
            left = self.operations[operator.kind](left, right)
        return left

    def parse_term(self) -> float:
        left = self.parse_factor()
        while self.current.kind in (TokenKind.STAR, TokenKind.SLASH):
            operator = self.advance()
            right = self.parse_factor()
            left = self.operations[operator.kind](left, right)
        return left

    def parse_factor(self) -> float:
        token = self.current

        if token.kind in (TokenKind.MINUS, TokenKind.PLUS):
            self.advance()
            operand = self._nested(self.parse_factor)
            if token.kind is TokenKind.MINUS:
                return self.operations[TokenKind.MINUS](0, operand)
            return operand

        if token.kind is TokenKind.NUMBER:
            self.advance()
            value = float(token.text)
            if not math.isfinite(value):
                raise InvalidExpressionError(self.expression, "number out of range", token.position)
            return value

        if token.kind is TokenKind.LPAREN:
            self.advance()
            value = self._nested(self.parse_expression)
            if self.current.kind is not TokenKind.RPAREN:
                raise InvalidExpressionError(
                    self.expression, "expected ')'", self.current.position
                )
            self.advance()
            return value

        if token.kind is TokenKind.END:
            raise InvalidExpressionError(self.expression, "unexpected end of expression", token.position)

        raise InvalidExpressionError(
            self.expression, f"unexpected token {token.text!r}", token.position
        )

    def _nested(self, rule: Callable[[], float]) -> float:
        self.depth += 1
        if self.depth > MAX_NESTING_DEPTH:
            raise InvalidExpressionError(
                self.expression, f"nesting deeper than {MAX_NESTING_DEPTH}", self.current.position
            )
        try:
            return rule()
        finally:
            self.depth -= 1


# =============================================================================
# EVALUATOR
# =============================================================================


class ExpressionEvaluator:
    """
    Вычислитель выражений.

    Операции редукции можно подменить (например, на кэширующие методы
    Calculator); по умолчанию используются чистые функции scaled arithmetic.
    """

    def __init__(
        self,
        operations: Mapping[TokenKind, BinaryOperation] | None = None,
        max_length: int = DEFAULT_MAX_LENGTH,
    ):
        """
        Args:
            operations: Отображение TokenKind оператора → бинарная функция
            max_length: Максимальная длина выражения (символов)
        """
        if max_length <= 0:
            raise ValueError(f"max_length must be positive, got {max_length}")

        self.operations = dict(operations or DEFAULT_OPERATIONS)
        self.max_length = max_length

    def calculate(self, expression: str) -> float:
        """
        Вычисление одного выражения.

        Args:
            expression: Строка вида "(0.1 + 0.2) * 3 - 0.5"

        Returns:
            Результат как float

        Raises:
            InvalidExpressionError: Синтаксическая ошибка
            UnbalancedParenthesesError: Непарная скобка
            DivisionByZeroError: Деление на ноль

        Examples:
            >>> ExpressionEvaluator().calculate("(0.1 + 0.2) * 3 - 0.5")
            0.4
            >>> ExpressionEvaluator().calculate("-(5 + 3) * 2")
            -16.0
        """
        if not isinstance(expression, str):
            raise InvalidExpressionError(repr(expression), "expression must be a string")

        if len(expression) > self.max_length:
            raise InvalidExpressionError(
                expression[:32] + "...",
                f"expression longer than {self.max_length} characters",
            )

        tokens = tokenize(expression)
        return _Parser(expression, tokens, self.operations).parse()

    def calculate_batch(
        self,
        expressions: Iterable[str],
        log_failures: bool = True,
    ) -> list[float | None]:
        """
        Пакетное вычисление с частичным восстановлением.

        Ошибочный элемент даёт None, пакет не прерывается.

        Examples:
            >>> ExpressionEvaluator().calculate_batch(["1+1", "bad", "2*2"])
            [2.0, None, 4.0]
        """
        results: list[float | None] = []
        for index, expression in enumerate(expressions):
            try:
                results.append(self.calculate(expression))
            except MathFixError as exc:
                if log_failures:
                    logger.warning("Batch expression #%d %r failed: %s", index, expression, exc)
                results.append(None)
        return results


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

_DEFAULT_EVALUATOR = ExpressionEvaluator()


def calculate(expression: str) -> float:
    """Вычисление выражения вычислителем по умолчанию."""
    return _DEFAULT_EVALUATOR.calculate(expression)


def calculate_batch(expressions: Iterable[str]) -> list[float | None]:
    """Пакетное вычисление вычислителем по умолчанию."""
    return _DEFAULT_EVALUATOR.calculate_batch(expressions)
