"""
Expression errors and the failure value returned by ``evaluate``.

Error code ranges:
- E0xx: Lexer errors
- E1xx: Parser errors
- E2xx: Domain (evaluation) errors

Inside the expression package problems are raised as ``ExpressionError``
subclasses. ``volumize.expr.evaluate`` converts every one of them into an
``EvalFailure`` value, so batch callers never see an exception.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .tokens import SourceSpan


class FailureKind(Enum):
    """Why an evaluation produced no number."""
    PARSE = "parse"
    DOMAIN = "domain"


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    code: str                       # E001, E101, etc.
    message: str                    # Human-readable message
    span: Optional[SourceSpan] = None
    source: Optional[str] = None    # The expression text
    hints: List[str] = field(default_factory=list)

    def format(self, show_source: bool = True) -> str:
        """Format the diagnostic for display."""
        parts = []
        if self.span is not None:
            parts.append(f"{self.span.column}: error[{self.code}]: {self.message}")
        else:
            parts.append(f"error[{self.code}]: {self.message}")

        # Source with caret
        if show_source and self.source is not None and self.span is not None:
            parts.append(f"  | {self.source}")
            underline_len = max(1, self.span.end - self.span.start)
            parts.append(f"  | {' ' * self.span.start}{'^' * underline_len}")

        for hint in self.hints:
            parts.append(f"  = hint: {hint}")

        return "\n".join(parts)

    def to_json(self) -> dict:
        """Convert to JSON-serializable dict for tooling integration."""
        return {
            "code": self.code,
            "message": self.message,
            "range": None if self.span is None else {
                "start": self.span.start,
                "end": self.span.end,
            },
            "hints": self.hints,
        }


class ExpressionError(Exception):
    """Base exception for expression errors."""

    kind = FailureKind.PARSE

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    def __str__(self) -> str:
        return self.diagnostic.format()


class LexerError(ExpressionError):
    """Error during lexical analysis (E0xx)."""
    pass


class ParserError(ExpressionError):
    """Error during parsing or name resolution (E1xx)."""
    pass


class DomainError(ExpressionError):
    """Evaluation left the real numbers (E2xx)."""
    kind = FailureKind.DOMAIN


@dataclass(frozen=True)
class EvalFailure:
    """Result of an evaluation that produced no real number."""
    kind: FailureKind
    code: str
    message: str

    @classmethod
    def from_error(cls, error: ExpressionError) -> "EvalFailure":
        return cls(error.kind, error.diagnostic.code, error.diagnostic.message)

    def __str__(self) -> str:
        return f"{self.kind.value} failure [{self.code}]: {self.message}"


# --- Lexer error codes ---

def error_unexpected_character(char: str, span: SourceSpan, source: str = None) -> LexerError:
    """E001: Unexpected character."""
    diag = Diagnostic(
        code="E001",
        message=f"unexpected character '{char}'",
        span=span,
        source=source,
    )
    return LexerError(diag)


def error_invalid_number_literal(text: str, span: SourceSpan, source: str = None) -> LexerError:
    """E002: Invalid number literal."""
    diag = Diagnostic(
        code="E002",
        message=f"invalid number literal '{text}'",
        span=span,
        source=source,
        hints=["exponents need digits: 1e3, 2.5E-4"],
    )
    return LexerError(diag)


# --- Parser error codes ---

def error_unexpected_token(expected: str, found: str, span: SourceSpan,
                           source: str = None) -> ParserError:
    """E101: Unexpected token."""
    diag = Diagnostic(
        code="E101",
        message=f"expected {expected}, found {found}",
        span=span,
        source=source,
    )
    return ParserError(diag)


def error_unexpected_end(expected: str, span: SourceSpan, source: str = None) -> ParserError:
    """E102: Unexpected end of expression."""
    diag = Diagnostic(
        code="E102",
        message=f"unexpected end of expression, expected {expected}",
        span=span,
        source=source,
    )
    return ParserError(diag)


def error_unknown_identifier(name: str, span: SourceSpan, source: str = None) -> ParserError:
    """E103: Unknown identifier."""
    diag = Diagnostic(
        code="E103",
        message=f"unknown identifier '{name}'",
        span=span,
        source=source,
        hints=["the only variable is 'x'; constants are pi, e and tau"],
    )
    return ParserError(diag)


def error_unknown_function(name: str, span: SourceSpan, source: str = None) -> ParserError:
    """E104: Unknown function."""
    diag = Diagnostic(
        code="E104",
        message=f"unknown function '{name}'",
        span=span,
        source=source,
    )
    return ParserError(diag)


def error_argument_count(name: str, expected: str, found: int, span: SourceSpan,
                         source: str = None) -> ParserError:
    """E105: Wrong number of arguments."""
    diag = Diagnostic(
        code="E105",
        message=f"{name}() takes {expected} argument(s), {found} given",
        span=span,
        source=source,
    )
    return ParserError(diag)


def error_too_deep(source: str = None) -> ParserError:
    """E106: Expression nests deeper than the parser can follow."""
    diag = Diagnostic(
        code="E106",
        message="expression is nested too deeply",
        source=source,
        hints=["remove redundant parentheses or split the expression"],
    )
    return ParserError(diag)


# --- Domain error codes ---

def error_math_domain(name: str, detail: str, span: Optional[SourceSpan] = None) -> DomainError:
    """E201: Math domain error (sqrt of a negative number, log of zero...)."""
    diag = Diagnostic(
        code="E201",
        message=f"math domain error in {name}: {detail}",
        span=span,
    )
    return DomainError(diag)


def error_division_by_zero(span: Optional[SourceSpan] = None) -> DomainError:
    """E202: Division by zero."""
    diag = Diagnostic(
        code="E202",
        message="division by zero",
        span=span,
    )
    return DomainError(diag)


def error_non_finite(value: float, span: Optional[SourceSpan] = None) -> DomainError:
    """E203: Result is infinite or NaN."""
    diag = Diagnostic(
        code="E203",
        message=f"non-finite result {value!r}",
        span=span,
    )
    return DomainError(diag)


def error_evaluation_too_deep(span: Optional[SourceSpan] = None) -> DomainError:
    """E204: Expression tree too deep to evaluate."""
    diag = Diagnostic(
        code="E204",
        message="expression is too long to evaluate",
        span=span,
    )
    return DomainError(diag)
