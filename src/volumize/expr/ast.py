"""
Abstract Syntax Tree (AST) node definitions for algebraic expressions.

Names are resolved by the parser: the free variable becomes ``Variable``,
named constants become ``Constant`` and calls carry the resolved builtin,
so an AST that exists is always evaluable up to domain errors.
"""

from dataclasses import dataclass, field
from typing import List, TYPE_CHECKING
from abc import ABC
from .tokens import SourceSpan, TokenType

if TYPE_CHECKING:  # pragma: no cover
    from .builtins import BuiltinFunction


@dataclass
class Expression(ABC):
    """Base class for all expression nodes."""
    span: SourceSpan  # Source location for error reporting


@dataclass
class Number(Expression):
    """A numeric literal."""
    value: float


@dataclass
class Variable(Expression):
    """The free variable (``x``)."""
    name: str


@dataclass
class Constant(Expression):
    """A named constant such as ``pi``."""
    name: str
    value: float


@dataclass
class UnaryOp(Expression):
    """A unary sign (``-x``, ``+x``)."""
    operator: TokenType  # PLUS or MINUS
    operand: Expression


@dataclass
class BinaryOp(Expression):
    """A binary arithmetic operation."""
    left: Expression
    operator: TokenType  # PLUS, MINUS, STAR, SLASH, CARET
    right: Expression


@dataclass
class FunctionCall(Expression):
    """A call of a builtin function (e.g. ``sqrt(x)``)."""
    function: "BuiltinFunction"
    arguments: List[Expression] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.function.name


_OPERATOR_TEXT = {
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.STAR: "*",
    TokenType.SLASH: "/",
    TokenType.CARET: "^",
}


def to_source(node: Expression) -> str:
    """Render an AST back to fully parenthesized expression text."""
    if isinstance(node, Number):
        return repr(node.value)
    if isinstance(node, (Variable, Constant)):
        return node.name
    if isinstance(node, UnaryOp):
        return f"({_OPERATOR_TEXT[node.operator]}{to_source(node.operand)})"
    if isinstance(node, BinaryOp):
        op = _OPERATOR_TEXT[node.operator]
        return f"({to_source(node.left)} {op} {to_source(node.right)})"
    if isinstance(node, FunctionCall):
        args = ", ".join(to_source(a) for a in node.arguments)
        return f"{node.name}({args})"
    raise TypeError(f"Unknown expression type: {type(node).__name__}")
