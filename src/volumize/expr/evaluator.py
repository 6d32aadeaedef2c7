"""
Tree-walking evaluator for compiled expressions.

``evaluate`` is the boundary of the expression package: it never raises for
a bad expression or an undefined value, it returns an ``EvalFailure``
instead. Callers apply their own policy to failures, normally
``value_or_zero``.
"""

import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Union

from .ast import (
    Expression, Number, Variable, Constant, UnaryOp, BinaryOp, FunctionCall,
)
from .errors import (
    DomainError,
    EvalFailure,
    ExpressionError,
    error_division_by_zero,
    error_evaluation_too_deep,
    error_math_domain,
    error_non_finite,
    error_too_deep,
)
from .lexer import tokenize
from .parser import Parser
from .tokens import TokenType

logger = logging.getLogger(__name__)

EvalResult = Union[float, EvalFailure]


def normalize_source(source: Optional[str]) -> str:
    """Return the text to compile; empty or missing expressions mean ``0``."""
    if source is None or not source.strip():
        return "0"
    return source.strip()


@dataclass(frozen=True)
class CompiledExpression:
    """A parsed expression in ``x`` that can be called like a function."""
    source: str
    tree: Expression

    def __call__(self, x: float) -> float:
        """Evaluate at ``x``.

        Raises:
            DomainError: if the value is not a finite real number, or the
                tree is too deep to walk
        """
        try:
            value = _Evaluator(float(x)).evaluate(self.tree)
        except RecursionError:
            # long left-associative chains are as deep as they are long
            raise error_evaluation_too_deep(self.tree.span) from None
        if not math.isfinite(value):
            raise error_non_finite(value, self.tree.span)
        return value


class _Evaluator:
    """Evaluates AST nodes by dispatching to type-specific methods."""

    def __init__(self, x: float):
        self.x = x

    def evaluate(self, expr: Expression) -> float:
        if isinstance(expr, Number):
            return expr.value
        elif isinstance(expr, Variable):
            return self.x
        elif isinstance(expr, Constant):
            return expr.value
        elif isinstance(expr, UnaryOp):
            return self._eval_unary_op(expr)
        elif isinstance(expr, BinaryOp):
            return self._eval_binary_op(expr)
        elif isinstance(expr, FunctionCall):
            return self._eval_function_call(expr)
        else:
            raise RuntimeError(f"Unknown expression type: {type(expr).__name__}")

    def _eval_unary_op(self, op: UnaryOp) -> float:
        operand = self.evaluate(op.operand)
        if op.operator == TokenType.MINUS:
            return -operand
        return operand

    def _eval_binary_op(self, op: BinaryOp) -> float:
        left = self.evaluate(op.left)
        right = self.evaluate(op.right)

        if op.operator == TokenType.PLUS:
            return left + right
        elif op.operator == TokenType.MINUS:
            return left - right
        elif op.operator == TokenType.STAR:
            return left * right
        elif op.operator == TokenType.SLASH:
            if right == 0.0:
                raise error_division_by_zero(op.span)
            return left / right
        elif op.operator == TokenType.CARET:
            # math.pow stays real: negative base with fractional exponent
            # raises instead of producing a complex number
            try:
                return math.pow(left, right)
            except (ValueError, ZeroDivisionError):
                raise error_math_domain("^", f"{left!r} ^ {right!r}", op.span)
            except OverflowError:
                raise error_non_finite(math.inf, op.span)
        else:
            raise RuntimeError(f"Unknown binary operator: {op.operator}")

    def _eval_function_call(self, call: FunctionCall) -> float:
        args = [self.evaluate(arg) for arg in call.arguments]
        try:
            return float(call.function.implementation(*args))
        except ZeroDivisionError:
            raise error_division_by_zero(call.span)
        except ValueError as e:
            raise error_math_domain(call.name, str(e), call.span)
        except OverflowError:
            raise error_non_finite(math.inf, call.span)


@lru_cache(maxsize=256)
def _compile_cached(source: str) -> CompiledExpression:
    tokens = tokenize(source)
    try:
        tree = Parser(tokens, source).parse()
    except RecursionError:
        raise error_too_deep(source) from None
    return CompiledExpression(source, tree)


def compile_expression(source: Optional[str]) -> CompiledExpression:
    """
    Compile expression text, caching one tree per distinct string.

    Args:
        source: expression in ``x``; empty or ``None`` means ``0``

    Raises:
        LexerError, ParserError: if the text is not a valid expression or is
            nested too deeply to parse
    """
    return _compile_cached(normalize_source(source))


def evaluate(source: Optional[str], x: float) -> EvalResult:
    """
    Evaluate expression text at ``x``.

    Returns the value (negative values included) or an ``EvalFailure``
    describing a parse or domain failure. Never raises for bad input.
    """
    try:
        return compile_expression(source)(x)
    except ExpressionError as e:
        return EvalFailure.from_error(e)
    except RecursionError:
        return EvalFailure.from_error(error_evaluation_too_deep())


def is_failure(result: EvalResult) -> bool:
    return isinstance(result, EvalFailure)


def value_or_zero(result: EvalResult, default: float = 0.0) -> float:
    """Coerce a failed evaluation to ``default`` (no contribution)."""
    if isinstance(result, EvalFailure):
        logger.debug("evaluation failed, using %s: %s", default, result)
        return default
    return result


def validate(source: Optional[str]) -> Optional[EvalFailure]:
    """Return the parse failure of ``source``, or ``None`` if it compiles."""
    try:
        compile_expression(source)
    except ExpressionError as e:
        return EvalFailure.from_error(e)
    except RecursionError:
        return EvalFailure.from_error(error_too_deep(normalize_source(source)))
    return None


def clear_cache() -> None:
    """Drop all cached compiled expressions."""
    _compile_cached.cache_clear()


__all__ = [
    "CompiledExpression",
    "DomainError",
    "EvalResult",
    "clear_cache",
    "compile_expression",
    "evaluate",
    "is_failure",
    "normalize_source",
    "validate",
    "value_or_zero",
]
