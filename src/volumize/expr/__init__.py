"""
Expression language for curves ``y = f(x)``.

This module provides:
- Lexer: Tokenizes expression text, resolving implicit multiplication
- Parser: Builds an AST with names resolved against the builtins
- Evaluator: Evaluates a compiled expression at a value of ``x``

Usage:
    from volumize.expr import evaluate, value_or_zero

    result = evaluate("2x^2 + sqrt(x)", 1.5)
    y = value_or_zero(result)   # failures contribute 0
"""

from .tokens import (
    Token,
    TokenType,
    SourceSpan,
)

from .lexer import (
    Lexer,
    tokenize,
)

from .parser import (
    Parser,
    parse,
)

from .ast import (
    Expression,
    Number,
    Variable,
    Constant,
    UnaryOp,
    BinaryOp,
    FunctionCall,
    to_source,
)

from .builtins import (
    BuiltinFunction,
    BuiltinRegistry,
    get_builtin_registry,
)

from .errors import (
    Diagnostic,
    DomainError,
    EvalFailure,
    ExpressionError,
    FailureKind,
    LexerError,
    ParserError,
)

from .evaluator import (
    CompiledExpression,
    EvalResult,
    clear_cache,
    compile_expression,
    evaluate,
    is_failure,
    normalize_source,
    validate,
    value_or_zero,
)

__all__ = [
    # Tokens
    'Token',
    'TokenType',
    'SourceSpan',

    # Lexer / Parser
    'Lexer',
    'tokenize',
    'Parser',
    'parse',

    # AST nodes
    'Expression',
    'Number',
    'Variable',
    'Constant',
    'UnaryOp',
    'BinaryOp',
    'FunctionCall',
    'to_source',

    # Builtins
    'BuiltinFunction',
    'BuiltinRegistry',
    'get_builtin_registry',

    # Errors
    'Diagnostic',
    'DomainError',
    'EvalFailure',
    'ExpressionError',
    'FailureKind',
    'LexerError',
    'ParserError',

    # Evaluation
    'CompiledExpression',
    'EvalResult',
    'clear_cache',
    'compile_expression',
    'evaluate',
    'is_failure',
    'normalize_source',
    'validate',
    'value_or_zero',
]
