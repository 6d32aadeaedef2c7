"""
Token types for the expression lexer.

Error code ranges:
- E0xx: Lexer errors
- E1xx: Parser errors
- E2xx: Domain (evaluation) errors
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """All token types recognized by the expression lexer."""

    # --- Literals ---
    NUMBER = auto()             # 2, 3.14, .5, 1e-9, 2.5E+10

    # --- Identifiers ---
    IDENTIFIER = auto()         # x, pi, sqrt, ...

    # --- Arithmetic operators ---
    PLUS = auto()               # +
    MINUS = auto()              # -
    STAR = auto()               # *
    SLASH = auto()              # /
    CARET = auto()              # ^ (power)
    DOUBLE_STAR = auto()        # ** (power, synonym of ^)

    # --- Delimiters ---
    LPAREN = auto()             # (
    RPAREN = auto()             # )
    COMMA = auto()              # ,

    # --- Special ---
    EOF = auto()                # end of expression


@dataclass(frozen=True)
class SourceSpan:
    """Half-open character range ``[start, end)`` in the expression text.

    Expressions are single-line, so offsets are enough; ``column`` is the
    1-indexed column of ``start`` for display.
    """
    start: int
    end: int

    @property
    def column(self) -> int:
        return self.start + 1

    def __str__(self) -> str:
        return f"{self.start + 1}-{self.end}"


@dataclass(frozen=True)
class Token:
    """A single token from the lexer."""
    type: TokenType
    value: Any              # float for NUMBER, str for IDENTIFIER
    lexeme: str             # The original source text ("" for synthetic tokens)
    span: SourceSpan

    @property
    def synthetic(self) -> bool:
        """True for tokens inserted by the lexer (implicit multiplication)."""
        return self.lexeme == "" and self.type != TokenType.EOF

    def __str__(self) -> str:
        if self.type in (TokenType.NUMBER, TokenType.IDENTIFIER):
            return f"{self.type.name}({self.value!r})"
        return self.type.name


# Tokens after which a number, identifier or '(' implies multiplication
IMPLICIT_MUL_LEFT = {TokenType.NUMBER, TokenType.RPAREN}

# Power operators, both right-associative
POWER_TOKENS = {TokenType.CARET, TokenType.DOUBLE_STAR}
