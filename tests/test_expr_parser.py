"""
Unit tests for the expression parser.
"""

import pytest
from volumize.expr import (
    tokenize, parse, to_source, ParserError, TokenType,
    Number, Variable, Constant, UnaryOp, BinaryOp, FunctionCall,
)


def parse_source(source):
    return parse(tokenize(source), source)


def parse_error(source):
    with pytest.raises(ParserError) as exc_info:
        parse_source(source)
    return exc_info.value.diagnostic


class TestParserBasics:
    """Primary expressions."""

    def test_number(self):
        tree = parse_source("42")
        assert isinstance(tree, Number)
        assert tree.value == 42.0

    def test_variable(self):
        tree = parse_source("x")
        assert isinstance(tree, Variable)
        assert tree.name == "x"

    def test_constants(self):
        tree = parse_source("pi")
        assert isinstance(tree, Constant)
        assert tree.value == pytest.approx(3.141592653589793)
        assert parse_source("E").name == "E"
        assert parse_source("tau").value == pytest.approx(6.283185307179586)

    def test_function_call(self):
        tree = parse_source("sqrt(x)")
        assert isinstance(tree, FunctionCall)
        assert tree.name == "sqrt"
        assert len(tree.arguments) == 1
        assert isinstance(tree.arguments[0], Variable)

    def test_multiple_arguments(self):
        tree = parse_source("max(1, x, 3)")
        assert tree.name == "max"
        assert len(tree.arguments) == 3

    def test_span_covers_parentheses(self):
        tree = parse_source("(x + 1)")
        assert tree.span.start == 0
        assert tree.span.end == 7


class TestPrecedence:
    """Operator precedence and associativity."""

    @pytest.mark.parametrize("source,expected", [
        ("1 + 2 * x", "(1.0 + (2.0 * x))"),
        ("1 - x - 2", "((1.0 - x) - 2.0)"),
        ("x / 2 / 4", "((x / 2.0) / 4.0)"),
        ("-x^2", "(-(x ^ 2.0))"),
        ("2^-1", "(2.0 ^ (-1.0))"),
        ("2^3^2", "(2.0 ^ (3.0 ^ 2.0))"),
        ("x**2", "(x ^ 2.0)"),
        ("2x^2", "(2.0 * (x ^ 2.0))"),
        ("(x+1)(x-1)", "((x + 1.0) * (x - 1.0))"),
        ("-2 * x", "((-2.0) * x)"),
        ("3sin(x)", "(3.0 * sin(x))"),
    ])
    def test_structure(self, source, expected):
        assert to_source(parse_source(source)) == expected

    def test_power_is_right_associative(self):
        tree = parse_source("x^2^3")
        assert isinstance(tree, BinaryOp)
        assert tree.operator == TokenType.CARET
        assert isinstance(tree.right, BinaryOp)

    def test_unary_minus_wraps_power(self):
        tree = parse_source("-x^2")
        assert isinstance(tree, UnaryOp)
        assert tree.operator == TokenType.MINUS
        assert isinstance(tree.operand, BinaryOp)


class TestParserErrors:
    """Parse and name resolution errors."""

    def test_unexpected_end(self):
        diag = parse_error("x +")
        assert diag.code == "E102"

    def test_unclosed_paren(self):
        diag = parse_error("(x + 1")
        assert diag.code == "E102"
        assert "')'" in diag.message

    def test_unexpected_token(self):
        diag = parse_error("x * * 2")
        assert diag.code == "E101"

    def test_trailing_tokens(self):
        diag = parse_error("x )")
        assert diag.code == "E101"
        assert diag.span.start == 2

    def test_unknown_identifier(self):
        diag = parse_error("y + 1")
        assert diag.code == "E103"
        assert "'y'" in diag.message
        assert diag.hints

    def test_unknown_function(self):
        diag = parse_error("foo(x)")
        assert diag.code == "E104"

    def test_variable_is_not_callable(self):
        """'x(x+1)' is a call of an unknown function named x."""
        assert parse_error("x(x+1)").code == "E104"

    def test_argument_count(self):
        diag = parse_error("sqrt(x, 2)")
        assert diag.code == "E105"
        assert "sqrt()" in diag.message

    def test_log_takes_one_or_two(self):
        parse_source("log(x)")
        parse_source("log(x, 2)")
        assert parse_error("log(x, 2, 3)").code == "E105"
        assert parse_error("atan2(x)").code == "E105"

    def test_diagnostic_json(self):
        diag = parse_error("foo(x)")
        data = diag.to_json()
        assert data["code"] == "E104"
        assert data["range"] == {"start": 0, "end": 3}
