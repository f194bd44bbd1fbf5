"""
Tokenizer — разбиение арифметического выражения на плоский список токенов

Поддерживаемые лексемы:
- Числа: 12, 12.5, .5
- Операторы: + - * /
- Скобки: ( )

Пробельные символы удаляются целиком. Любой другой символ → InvalidExpressionError
с позицией в исходной строке.
"""

import re
from dataclasses import dataclass
from enum import Enum

from mathfix.errors import InvalidExpressionError


class TokenKind(str, Enum):
    """Тип токена."""

    NUMBER = "NUMBER"
    PLUS = "PLUS"
    MINUS = "MINUS"
    STAR = "STAR"
    SLASH = "SLASH"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    END = "END"


@dataclass(frozen=True)
class Token:
    """Токен выражения."""

    kind: TokenKind
    text: str
    position: int  # смещение в исходной строке


_NON_WHITESPACE = re.compile(r"\S")
_NUMBER = re.compile(r"\d+(?:\.\d+)?|\.\d+")

_SYMBOLS: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


def tokenize(expression: str) -> list[Token]:
    """
    Разбиение выражения на токены.

    Пробелы удаляются до разбора, в том числе внутри числа:
    "1 000" читается как 1000. Позиции токенов указывают в исходную строку.

    Args:
        expression: Исходная строка

    Returns:
        Список токенов, последний всегда TokenKind.END

    Raises:
        InvalidExpressionError: Недопустимый символ или пустое выражение

    Examples:
        >>> [t.text for t in tokenize("(0.1 + 0.2) * 3")]
        ['(', '0.1', '+', '0.2', ')', '*', '3', '']
        >>> [t.text for t in tokenize("1 000 + 1")]
        ['1000', '+', '1', '']
    """
    offsets = [match.start() for match in _NON_WHITESPACE.finditer(expression)]
    compact = "".join(expression[offset] for offset in offsets)

    tokens: list[Token] = []
    pos = 0
    while pos < len(compact):
        char = compact[pos]

        if char in _SYMBOLS:
            tokens.append(Token(_SYMBOLS[char], char, offsets[pos]))
            pos += 1
            continue

        number = _NUMBER.match(compact, pos)
        if number:
            tokens.append(Token(TokenKind.NUMBER, number.group(), offsets[pos]))
            pos = number.end()
            continue

        raise InvalidExpressionError(expression, f"unexpected character {char!r}", offsets[pos])

    if not tokens:
        raise InvalidExpressionError(expression, "empty expression")

    tokens.append(Token(TokenKind.END, "", len(expression)))
    return tokens
