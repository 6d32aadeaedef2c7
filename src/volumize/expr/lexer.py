"""
Lexer for single-variable algebraic expressions.

Converts expression text into a list of tokens for the parser.
Supports:
- Decimal literals with optional fraction and exponent (2, 3.5, .5, 1e-3)
- Identifiers for the variable, constants and function names
- Operators + - * / ^ ** and the delimiters ( ) ,
- Implicit multiplication, resolved here rather than by rewriting text

Implicit multiplication inserts a synthetic STAR token between a number and
a following identifier or '(' ("2x", "3(x+1)"), and between ')' and a
following number, identifier or '(' ("(x+1)(x-1)", "(x+1)2"). An identifier
followed by '(' is a function call and is left alone, so "2sqrt(x)" becomes
"2 * sqrt(x)" and never splits the function name.
"""

from typing import Iterator, List, Optional
from .tokens import Token, TokenType, SourceSpan, IMPLICIT_MUL_LEFT
from .errors import (
    error_unexpected_character,
    error_invalid_number_literal,
)


_SINGLE_CHAR_TOKENS = {
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '/': TokenType.SLASH,
    '^': TokenType.CARET,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    ',': TokenType.COMMA,
}

_IMPLICIT_MUL_RIGHT = {
    TokenType.NUMBER: {TokenType.IDENTIFIER, TokenType.LPAREN},
    TokenType.RPAREN: {TokenType.NUMBER, TokenType.IDENTIFIER, TokenType.LPAREN},
}


class Lexer:
    """
    Tokenizer for algebraic expressions.

    Usage:
        lexer = Lexer("2x^2 + 1")
        tokens = lexer.tokenize()

    Or for streaming:
        for token in Lexer("sin(x)"):
            process(token)
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0            # Current position in source
        self._previous: Optional[Token] = None
        self._pending: Optional[Token] = None

    def _peek(self, offset: int = 0) -> str:
        """Look at character at current position + offset without consuming."""
        idx = self.pos + offset
        if idx >= len(self.source):
            return '\0'
        return self.source[idx]

    def _advance(self) -> str:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return '\0'
        ch = self.source[self.pos]
        self.pos += 1
        return ch

    def _is_at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _span(self, start: int) -> SourceSpan:
        return SourceSpan(start, self.pos)

    def _make_token(self, token_type: TokenType, value, start: int) -> Token:
        return Token(token_type, value, self.source[start:self.pos], self._span(start))

    def _skip_whitespace(self) -> None:
        while self._peek() in ' \t\r\n':
            self._advance()

    def _scan_number(self) -> Token:
        """Scan a decimal literal with optional fraction and exponent."""
        start = self.pos

        while self._peek().isdigit():
            self._advance()

        if self._peek() == '.':
            self._advance()  # consume '.'
            while self._peek().isdigit():
                self._advance()

        # Only a digit (optionally signed) makes 'e' an exponent; "2e" is 2*e
        if self._peek() in 'eE':
            if self._peek(1).isdigit() or (self._peek(1) in '+-' and self._peek(2).isdigit()):
                self._advance()  # consume 'e'
                if self._peek() in '+-':
                    self._advance()
                while self._peek().isdigit():
                    self._advance()

        lexeme = self.source[start:self.pos]
        try:
            value = float(lexeme)
        except ValueError:
            raise error_invalid_number_literal(lexeme, self._span(start), self.source)
        return self._make_token(TokenType.NUMBER, value, start)

    def _scan_identifier(self) -> Token:
        start = self.pos
        while self._peek().isalnum() or self._peek() == '_':
            self._advance()
        lexeme = self.source[start:self.pos]
        return self._make_token(TokenType.IDENTIFIER, lexeme, start)

    def _scan_raw_token(self) -> Token:
        """Scan the next token from the source text."""
        self._skip_whitespace()

        if self._is_at_end():
            return Token(TokenType.EOF, None, "", SourceSpan(self.pos, self.pos))

        start = self.pos
        ch = self._peek()

        if ch.isdigit() or (ch == '.' and self._peek(1).isdigit()):
            return self._scan_number()

        if ch.isalpha() or ch == '_':
            return self._scan_identifier()

        self._advance()

        if ch == '*':
            if self._peek() == '*':
                self._advance()
                return self._make_token(TokenType.DOUBLE_STAR, "**", start)
            return self._make_token(TokenType.STAR, ch, start)

        if ch in _SINGLE_CHAR_TOKENS:
            return self._make_token(_SINGLE_CHAR_TOKENS[ch], ch, start)

        raise error_unexpected_character(ch, self._span(start), self.source)

    def _scan_token(self) -> Token:
        """Return the next token, inserting implicit multiplication."""
        if self._pending is not None:
            token, self._pending = self._pending, None
        else:
            token = self._scan_raw_token()
            prev = self._previous
            if prev is not None and prev.type in IMPLICIT_MUL_LEFT \
                    and token.type in _IMPLICIT_MUL_RIGHT[prev.type]:
                self._pending = token
                token = Token(TokenType.STAR, "*", "",
                              SourceSpan(token.span.start, token.span.start))
        self._previous = token
        return token

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source, returning a list of tokens."""
        tokens = []
        while True:
            token = self._scan_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                break
        return tokens

    def __iter__(self) -> Iterator[Token]:
        """Iterate over tokens."""
        while True:
            token = self._scan_token()
            yield token
            if token.type == TokenType.EOF:
                break


def tokenize(source: str) -> List[Token]:
    """
    Convenience function to tokenize an expression.

    Args:
        source: The expression text

    Returns:
        List of tokens, ending with EOF

    Raises:
        LexerError: If tokenization fails
    """
    return Lexer(source).tokenize()
