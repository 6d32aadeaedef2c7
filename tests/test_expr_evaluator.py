"""
Tests for expression evaluation and the failure value.
"""

import math

import pytest
from volumize.expr import (
    EvalFailure,
    FailureKind,
    DomainError,
    ParserError,
    compile_expression,
    evaluate,
    is_failure,
    normalize_source,
    validate,
    value_or_zero,
)


class TestEvaluation:
    """Successful evaluations."""

    @pytest.mark.parametrize("source,x,expected", [
        ("2*x", 1.5, 3.0),
        ("x^2", 3.0, 9.0),
        ("2x", 4.0, 8.0),
        ("2x^2", 3.0, 18.0),
        ("-x^2", 3.0, -9.0),
        ("2^-1", 0.0, 0.5),
        ("2^3^2", 0.0, 512.0),
        ("x**3", 2.0, 8.0),
        ("(x+1)(x-1)", 3.0, 8.0),
        ("3(x+1)", 1.0, 6.0),
        ("1e-3", 0.0, 0.001),
        ("2e", 0.0, 2 * math.e),
        ("sqrt(x)", 4.0, 2.0),
        ("2sqrt(x)", 9.0, 6.0),
        ("cbrt(x)", -8.0, -2.0),
        ("abs(x)", -2.5, 2.5),
        ("sign(x)", -3.0, -1.0),
        ("ln(e)", 0.0, 1.0),
        ("log(x)", math.e, 1.0),
        ("log(8, 2)", 0.0, 3.0),
        ("log10(1000)", 0.0, 3.0),
        ("log2(x)", 8.0, 3.0),
        ("sin(pi/2)", 0.0, 1.0),
        ("cos(0)", 0.0, 1.0),
        ("sec(0)", 0.0, 1.0),
        ("atan2(1, 1)", 0.0, math.pi / 4),
        ("floor(x)", 2.7, 2.0),
        ("ceil(x)", 2.1, 3.0),
        ("round(x)", 2.5, 3.0),
        ("round(x)", -2.5, -3.0),
        ("min(x, 2, 3)", 5.0, 2.0),
        ("max(1, x)", 5.0, 5.0),
        ("pow(x, 2)", 3.0, 9.0),
        ("tau / PI", 0.0, 2.0),
        ("  x + 1  ", 1.0, 2.0),
    ])
    def test_values(self, source, x, expected):
        assert evaluate(source, x) == pytest.approx(expected)

    @pytest.mark.parametrize("source", ["", "   ", None])
    def test_empty_expression_is_zero(self, source):
        assert evaluate(source, 12.0) == 0.0
        assert normalize_source(source) == "0"

    def test_negative_values_are_returned(self):
        """Clamping is the caller's business."""
        assert evaluate("x - 5", 1.0) == pytest.approx(-4.0)

    def test_deterministic(self):
        assert evaluate("sin(x)^2 + 1/x", 0.7) == evaluate("sin(x)^2 + 1/x", 0.7)

    def test_compiled_expression_is_callable(self):
        f = compile_expression("x^2 + 1")
        assert f(2) == pytest.approx(5.0)
        assert f.source == "x^2 + 1"

    def test_compile_is_cached(self):
        assert compile_expression("x + 2") is compile_expression("x + 2")


class TestFailures:
    """Failures are returned as values."""

    @pytest.mark.parametrize("source,code", [
        ("x +", "E102"),
        ("y", "E103"),
        ("foo(x)", "E104"),
        ("sqrt()", "E105"),
        ("x $ 1", "E001"),
    ])
    def test_parse_failures(self, source, code):
        result = evaluate(source, 1.0)
        assert isinstance(result, EvalFailure)
        assert result.kind == FailureKind.PARSE
        assert result.code == code
        assert is_failure(result)

    @pytest.mark.parametrize("source,x,code", [
        ("sqrt(x)", -1.0, "E201"),
        ("ln(x)", 0.0, "E201"),
        ("asin(x)", 2.0, "E201"),
        ("x^0.5", -4.0, "E201"),
        ("1/x", 0.0, "E202"),
        ("0^-1", 0.0, "E201"),
        ("exp(x)", 1000.0, "E203"),
        ("x^x", 1000.0, "E203"),
        ("cot(x)", 0.0, "E202"),
    ])
    def test_domain_failures(self, source, x, code):
        result = evaluate(source, x)
        assert isinstance(result, EvalFailure)
        assert result.kind == FailureKind.DOMAIN
        assert result.code == code

    def test_failure_message(self):
        result = evaluate("1/x", 0.0)
        assert "division by zero" in result.message
        assert "domain failure [E202]" in str(result)

    def test_compiled_call_raises_domain_error(self):
        f = compile_expression("1/x")
        with pytest.raises(DomainError):
            f(0.0)

    def test_compile_raises_parser_error(self):
        with pytest.raises(ParserError):
            compile_expression("2 +* x")

    def test_long_sum_is_a_domain_failure(self):
        """A flat sum parses, but its tree is as deep as it is long."""
        result = evaluate("+".join(["x"] * 5000), 1.0)
        assert isinstance(result, EvalFailure)
        assert result.kind == FailureKind.DOMAIN
        assert result.code == "E204"

    def test_deep_parentheses_are_a_parse_failure(self):
        source = "(" * 2000 + "x" + ")" * 2000
        result = evaluate(source, 1.0)
        assert isinstance(result, EvalFailure)
        assert result.kind == FailureKind.PARSE
        assert result.code == "E106"
        with pytest.raises(ParserError):
            compile_expression(source)
        assert validate(source).code == "E106"

    def test_moderate_nesting_still_evaluates(self):
        assert evaluate("(" * 50 + "x" + ")" * 50, 2.0) == 2.0
        assert evaluate("+".join(["x"] * 100), 1.0) == 100.0


class TestPolicy:
    """Coercion of failures to zero."""

    def test_value_or_zero_passes_numbers(self):
        assert value_or_zero(3.5) == 3.5
        assert value_or_zero(-1.0) == -1.0

    def test_value_or_zero_coerces_failures(self):
        assert value_or_zero(evaluate("sqrt(x)", -1.0)) == 0.0
        assert value_or_zero(evaluate("bogus", 1.0), default=7.0) == 7.0

    def test_validate(self):
        assert validate("2x + 1") is None
        failure = validate("2x +")
        assert failure.kind == FailureKind.PARSE
        assert failure.code == "E102"

    def test_validate_ignores_domain(self):
        """Validation is about syntax; 1/x is a valid expression."""
        assert validate("1/x") is None
