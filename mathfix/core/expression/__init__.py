"""
Expression evaluation для mathfix

Токенизатор и recursive-descent парсер арифметических выражений
(+ - * / и скобки), все редукции выполняются через scaled arithmetic.
"""

from mathfix.core.expression.evaluator import (
    MAX_NESTING_DEPTH,
    ExpressionEvaluator,
    calculate,
    calculate_batch,
)
from mathfix.core.expression.tokenizer import Token, TokenKind, tokenize

__all__ = [
    # Tokenizer
    "Token",
    "TokenKind",
    "tokenize",
    # Evaluator
    "MAX_NESTING_DEPTH",
    "ExpressionEvaluator",
    "calculate",
    "calculate_batch",
]
