"""
Built-in functions and constants available in expressions.

All functions are real valued. Failures inside ``math`` (``ValueError`` for
domain errors, ``ZeroDivisionError``, ``OverflowError``) propagate to the
evaluator, which turns them into ``DomainError``.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional
import math


@dataclass
class BuiltinFunction:
    """
    A built-in function with its implementation and accepted arity.

    ``max_args`` of ``None`` means variadic.
    """
    name: str
    implementation: Callable[..., float]
    min_args: int = 1
    max_args: Optional[int] = 1
    doc: str = ""

    def accepts(self, count: int) -> bool:
        if count < self.min_args:
            return False
        return self.max_args is None or count <= self.max_args

    def arity_text(self) -> str:
        if self.max_args is None:
            return f"at least {self.min_args}"
        if self.min_args == self.max_args:
            return str(self.min_args)
        return f"{self.min_args} to {self.max_args}"


def _cbrt(v: float) -> float:
    return math.copysign(abs(v) ** (1.0 / 3.0), v)


def _sign(v: float) -> float:
    if v > 0:
        return 1.0
    if v < 0:
        return -1.0
    return 0.0


def _round(v: float) -> float:
    # half away from zero
    return math.copysign(math.floor(abs(v) + 0.5), v)


def _log(v: float, base: Optional[float] = None) -> float:
    if base is None:
        return math.log(v)
    return math.log(v, base)


def _sec(v: float) -> float:
    return 1.0 / math.cos(v)


def _csc(v: float) -> float:
    return 1.0 / math.sin(v)


def _cot(v: float) -> float:
    return 1.0 / math.tan(v)


class BuiltinRegistry:
    """
    Registry of the functions and constants an expression may name.
    """

    def __init__(self):
        self._functions: Dict[str, BuiltinFunction] = {}
        self._constants: Dict[str, float] = {}
        self._register_all()

    def get_function(self, name: str) -> Optional[BuiltinFunction]:
        """Look up a function by name."""
        return self._functions.get(name)

    def get_constant(self, name: str) -> Optional[float]:
        """Look up a constant by name."""
        return self._constants.get(name)

    def register(self, func: BuiltinFunction) -> None:
        """Register a function."""
        self._functions[func.name] = func

    def register_constant(self, name: str, value: float) -> None:
        self._constants[name] = value

    @property
    def function_names(self):
        return sorted(self._functions)

    @property
    def constant_names(self):
        return sorted(self._constants)

    def _register_all(self) -> None:
        self._register_math_functions()
        self._register_constants()

    def _register_math_functions(self) -> None:
        unary = [
            ("sqrt", math.sqrt, "square root"),
            ("cbrt", _cbrt, "cube root"),
            ("abs", abs, "absolute value"),
            ("sign", _sign, "sign (-1, 0 or 1)"),
            ("exp", math.exp, "e raised to the argument"),
            ("ln", math.log, "natural logarithm"),
            ("log10", math.log10, "base 10 logarithm"),
            ("log2", math.log2, "base 2 logarithm"),
            ("sin", math.sin, "sine (radians)"),
            ("cos", math.cos, "cosine (radians)"),
            ("tan", math.tan, "tangent (radians)"),
            ("sec", _sec, "secant"),
            ("csc", _csc, "cosecant"),
            ("cot", _cot, "cotangent"),
            ("asin", math.asin, "inverse sine"),
            ("acos", math.acos, "inverse cosine"),
            ("atan", math.atan, "inverse tangent"),
            ("sinh", math.sinh, "hyperbolic sine"),
            ("cosh", math.cosh, "hyperbolic cosine"),
            ("tanh", math.tanh, "hyperbolic tangent"),
            ("floor", math.floor, "round down"),
            ("ceil", math.ceil, "round up"),
            ("round", _round, "round half away from zero"),
        ]
        for name, impl, doc in unary:
            self.register(BuiltinFunction(name, impl, doc=doc))

        self.register(BuiltinFunction("log", _log, 1, 2, "logarithm, natural or log(v, base)"))
        self.register(BuiltinFunction("atan2", math.atan2, 2, 2, "two-argument inverse tangent"))
        self.register(BuiltinFunction("pow", math.pow, 2, 2, "power"))

        # Variadic min/max
        self.register(BuiltinFunction("min", min, 1, None, "smallest argument"))
        self.register(BuiltinFunction("max", max, 1, None, "largest argument"))

    def _register_constants(self) -> None:
        for name, value in (("pi", math.pi), ("PI", math.pi),
                            ("e", math.e), ("E", math.e),
                            ("tau", math.tau)):
            self.register_constant(name, value)


_registry: Optional[BuiltinRegistry] = None


def get_builtin_registry() -> BuiltinRegistry:
    """Return the shared builtin registry."""
    global _registry
    if _registry is None:
        _registry = BuiltinRegistry()
    return _registry
