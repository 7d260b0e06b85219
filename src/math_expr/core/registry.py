"""
Built-in functions and constants.

Closed set: there is no registration API. Name lookup ignores ASCII case.
Results follow IEEE-754 / C math library conventions, so domain errors
produce NaN or infinity instead of raising.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field


class FunctionEntry(BaseModel):
    """A built-in function of fixed arity."""

    name: str = Field(description="Canonical lower-case name")
    arity: int = Field(ge=1, description="Exact number of arguments")
    rule: Callable[[tuple[float, ...]], float] = Field(description="Numeric rule")
    summary: str = Field(default="", description="One-line description")

    model_config = ConfigDict(frozen=True)

    def __call__(self, args: tuple[float, ...]) -> float:
        return self.rule(args)


class ConstantEntry(BaseModel):
    """A named numeric constant."""

    name: str = Field(description="Canonical lower-case name")
    value: float

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Numeric rules
# ---------------------------------------------------------------------------


def _sqrt(x: float) -> float:
    if math.isnan(x) or x < 0:
        return math.nan
    return math.sqrt(x)


def _log_with(fn: Callable[[float], float]) -> Callable[[float], float]:
    """Wrap a logarithm so x == 0 gives -inf and x < 0 gives NaN."""

    def rule(x: float) -> float:
        if math.isnan(x) or x < 0:
            return math.nan
        if x == 0:
            return -math.inf
        return fn(x)

    return rule


def _exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def _is_odd_integer(y: float) -> bool:
    return math.isfinite(y) and y == math.floor(y) and math.fmod(y, 2.0) != 0


def c_pow(x: float, y: float) -> float:
    """``pow`` with C semantics: never raises, never returns complex."""
    if x == 0 and y < 0:
        if _is_odd_integer(y):
            return math.copysign(math.inf, x)
        return math.inf
    try:
        return math.pow(x, y)
    except OverflowError:
        if x < 0 and _is_odd_integer(y):
            return -math.inf
        return math.inf
    except ValueError:
        # Negative base with a non-integer exponent
        return math.nan


def c_fmod(x: float, y: float) -> float:
    """``fmod`` with C semantics: remainder takes the sign of *x*."""
    try:
        return math.fmod(x, y)
    except ValueError:
        # fmod(inf, y)
        return math.nan


def _degrees(fn: Callable[[float], float]) -> Callable[[float], float]:
    """Wrap a trig function so it takes its argument in degrees."""

    def rule(x: float) -> float:
        if math.isinf(x):
            return math.nan
        return fn(math.radians(x))

    return rule


def _unary(fn: Callable[[float], float]) -> Callable[[tuple[float, ...]], float]:
    return lambda args: fn(args[0])


def _binary(fn: Callable[[float, float], float]) -> Callable[[tuple[float, ...]], float]:
    return lambda args: fn(args[0], args[1])


def _max(a: float, b: float) -> float:
    return a if a > b else b


def _min(a: float, b: float) -> float:
    return a if a < b else b


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

_FUNCTIONS: tuple[FunctionEntry, ...] = (
    FunctionEntry(name="sin", arity=1, rule=_unary(_degrees(math.sin)), summary="sine (degrees)"),
    FunctionEntry(name="cos", arity=1, rule=_unary(_degrees(math.cos)), summary="cosine (degrees)"),
    FunctionEntry(name="tan", arity=1, rule=_unary(_degrees(math.tan)), summary="tangent (degrees)"),
    FunctionEntry(name="sqrt", arity=1, rule=_unary(_sqrt), summary="square root"),
    FunctionEntry(name="abs", arity=1, rule=_unary(math.fabs), summary="absolute value"),
    FunctionEntry(name="ln", arity=1, rule=_unary(_log_with(math.log)), summary="natural logarithm"),
    FunctionEntry(name="log", arity=1, rule=_unary(_log_with(math.log10)), summary="base-10 logarithm"),
    FunctionEntry(name="exp", arity=1, rule=_unary(_exp), summary="e raised to x"),
    FunctionEntry(name="pow", arity=2, rule=_binary(c_pow), summary="x raised to y"),
    FunctionEntry(name="max", arity=2, rule=_binary(_max), summary="larger of two values"),
    FunctionEntry(name="min", arity=2, rule=_binary(_min), summary="smaller of two values"),
)

_CONSTANTS: tuple[ConstantEntry, ...] = (
    ConstantEntry(name="pi", value=math.pi),
    ConstantEntry(name="e", value=math.e),
)

FUNCTIONS: Mapping[str, FunctionEntry] = MappingProxyType({f.name: f for f in _FUNCTIONS})
CONSTANTS: Mapping[str, ConstantEntry] = MappingProxyType({c.name: c for c in _CONSTANTS})


def _fold(name: str) -> str | None:
    # Registry names are ASCII; anything else can never match.
    if not name.isascii():
        return None
    return name.lower()


def lookup_function(name: str) -> FunctionEntry | None:
    """Find a built-in function by name, ignoring ASCII case."""
    key = _fold(name)
    return FUNCTIONS.get(key) if key is not None else None


def lookup_constant(name: str) -> ConstantEntry | None:
    """Find a built-in constant by name, ignoring ASCII case."""
    key = _fold(name)
    return CONSTANTS.get(key) if key is not None else None


def iter_functions() -> Iterator[FunctionEntry]:
    return iter(_FUNCTIONS)


def iter_constants() -> Iterator[ConstantEntry]:
    return iter(_CONSTANTS)
