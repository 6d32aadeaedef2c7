"""
Recursive descent parser for algebraic expressions.

Converts a token list into an expression AST and resolves names against
the builtin registry.
"""

from typing import List, Optional
from .tokens import Token, TokenType, SourceSpan, POWER_TOKENS
from .ast import (
    Expression, Number, Variable, Constant, UnaryOp, BinaryOp, FunctionCall,
)
from .builtins import BuiltinRegistry, get_builtin_registry
from .errors import (
    error_unexpected_token,
    error_unexpected_end,
    error_unknown_identifier,
    error_unknown_function,
    error_argument_count,
)

VARIABLE_NAME = "x"


class Parser:
    """
    Recursive descent parser for expressions in one variable.

    Usage:
        parser = Parser(tokens, source)
        tree = parser.parse()

    Precedence, lowest first:
        + -
        * /
        unary + -
        ^ ** (right-associative, exponent may carry its own sign)

    Power binds tighter than unary minus, so ``-x^2`` is ``-(x^2)`` and
    ``2^-1`` is ``0.5``.
    """

    # Binary operator precedence levels (higher = tighter binding)
    PRECEDENCE = {
        TokenType.PLUS: 1,
        TokenType.MINUS: 1,
        TokenType.STAR: 2,
        TokenType.SLASH: 2,
    }

    def __init__(self, tokens: List[Token], source: Optional[str] = None,
                 registry: Optional[BuiltinRegistry] = None,
                 variable: str = VARIABLE_NAME):
        self.tokens = tokens
        self.source = source
        self.registry = registry or get_builtin_registry()
        self.variable = variable
        self.pos = 0

    # =========================================================================
    # Token Navigation
    # =========================================================================

    def _current(self) -> Token:
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[self.pos]

    def _is_at_end(self) -> bool:
        return self._current().type == TokenType.EOF

    def _check(self, token_type: TokenType) -> bool:
        return self._current().type == token_type

    def _advance(self) -> Token:
        token = self._current()
        if not self._is_at_end():
            self.pos += 1
        return token

    def _consume(self, token_type: TokenType, expected: str) -> Token:
        if self._check(token_type):
            return self._advance()
        self._error(expected)

    def _match(self, *token_types: TokenType) -> Optional[Token]:
        if self._current().type in token_types:
            return self._advance()
        return None

    def _error(self, expected: str) -> None:
        token = self._current()
        if token.type == TokenType.EOF:
            raise error_unexpected_end(expected, token.span, self.source)
        found = token.lexeme or token.type.name
        raise error_unexpected_token(expected, f"'{found}'", token.span, self.source)

    # =========================================================================
    # Expression Parsing (Precedence Climbing)
    # =========================================================================

    def parse(self) -> Expression:
        """Parse a complete expression; trailing tokens are an error."""
        expr = self._parse_binary_expr(0)
        if not self._is_at_end():
            self._error("operator or end of expression")
        return expr

    def _parse_binary_expr(self, min_precedence: int) -> Expression:
        """Parse left-associative binary expressions with precedence climbing."""
        left = self._parse_unary_expr()

        while True:
            op_token = self._current()
            precedence = self.PRECEDENCE.get(op_token.type)

            if precedence is None or precedence < min_precedence:
                break

            self._advance()  # consume operator
            right = self._parse_binary_expr(precedence + 1)

            left = BinaryOp(
                span=SourceSpan(left.span.start, right.span.end),
                left=left,
                operator=op_token.type,
                right=right
            )

        return left

    def _parse_unary_expr(self) -> Expression:
        if self._check(TokenType.MINUS) or self._check(TokenType.PLUS):
            op = self._advance()
            operand = self._parse_unary_expr()
            return UnaryOp(
                span=SourceSpan(op.span.start, operand.span.end),
                operator=op.type,
                operand=operand
            )

        return self._parse_power_expr()

    def _parse_power_expr(self) -> Expression:
        base = self._parse_primary_expr()

        if self._current().type in POWER_TOKENS:
            self._advance()
            # Right-associative; the exponent is a full unary expression
            exponent = self._parse_unary_expr()
            return BinaryOp(
                span=SourceSpan(base.span.start, exponent.span.end),
                left=base,
                operator=TokenType.CARET,
                right=exponent
            )

        return base

    def _parse_primary_expr(self) -> Expression:
        token = self._current()

        if token.type == TokenType.NUMBER:
            self._advance()
            return Number(span=token.span, value=token.value)

        if token.type == TokenType.IDENTIFIER:
            self._advance()
            if self._check(TokenType.LPAREN):
                return self._parse_call(token)
            return self._resolve_name(token)

        if token.type == TokenType.LPAREN:
            self._advance()
            inner = self._parse_binary_expr(0)
            closing = self._consume(TokenType.RPAREN, "')'")
            # Widen the span to include the parentheses
            span = SourceSpan(token.span.start, closing.span.end)
            inner.span = span
            return inner

        self._error("expression")

    def _resolve_name(self, token: Token) -> Expression:
        name = token.value
        if name == self.variable:
            return Variable(span=token.span, name=name)
        value = self.registry.get_constant(name)
        if value is not None:
            return Constant(span=token.span, name=name, value=value)
        raise error_unknown_identifier(name, token.span, self.source)

    def _parse_call(self, name_token: Token) -> FunctionCall:
        name = name_token.value
        func = self.registry.get_function(name)
        if func is None:
            raise error_unknown_function(name, name_token.span, self.source)

        self._consume(TokenType.LPAREN, "'('")
        args = []
        if not self._check(TokenType.RPAREN):
            args.append(self._parse_binary_expr(0))
            while self._match(TokenType.COMMA):
                args.append(self._parse_binary_expr(0))
        closing = self._consume(TokenType.RPAREN, "')'")

        span = SourceSpan(name_token.span.start, closing.span.end)
        if not func.accepts(len(args)):
            raise error_argument_count(name, func.arity_text(), len(args), span, self.source)

        return FunctionCall(span=span, function=func, arguments=args)


def parse(tokens: List[Token], source: Optional[str] = None) -> Expression:
    """
    Convenience function to parse tokens into an expression tree.

    Raises:
        ParserError: If parsing or name resolution fails
    """
    return Parser(tokens, source).parse()
