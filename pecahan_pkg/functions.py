"""Numeric function library reachable from expressions.

Every callable here takes and returns floats. Domain errors raise
ValueError and overflows raise OverflowError; the evaluator turns both
into an opaque evaluation error.
"""

from __future__ import annotations

import math
from typing import Callable

from .config import MAX_COMBINATORIC_N, MAX_FACTORIAL_ARG


def _floor_int(value: float) -> int:
    if not math.isfinite(value):
        raise ValueError("Expected a finite number")
    return math.floor(value)


def fact(n: float) -> float:
    """Factorial of floor(n). Negative arguments are rejected."""
    k = _floor_int(n)
    if k < 0:
        raise ValueError("Factorial of a negative number")
    if k > MAX_FACTORIAL_ARG:
        raise OverflowError(f"{k}! does not fit in a float")
    return float(math.factorial(k))


def _combinatoric_args(n: float, k: float) -> tuple[int, int] | None:
    n_int, k_int = _floor_int(n), _floor_int(k)
    if k_int > n_int or k_int < 0:
        return None
    if n_int > MAX_COMBINATORIC_N:
        raise OverflowError(f"n={n_int} is too large")
    return n_int, k_int


def nCr(n: float, k: float) -> float:  # noqa: N802
    """Combinations; 0 when k > n or k < 0."""
    args = _combinatoric_args(n, k)
    if args is None:
        return 0.0
    return float(math.comb(*args))


def nPr(n: float, k: float) -> float:  # noqa: N802
    """Permutations; 0 when k > n or k < 0."""
    args = _combinatoric_args(n, k)
    if args is None:
        return 0.0
    return float(math.perm(*args))


def mean(*values: float) -> float:
    if not values:
        raise ValueError("mean of no values")
    return math.fsum(values) / len(values)


def _sum_of_squares(values: tuple[float, ...]) -> float:
    m = mean(*values)
    return math.fsum((v - m) * (v - m) for v in values)


def stdev(*values: float) -> float:
    """Sample standard deviation (n - 1 divisor); 0 for fewer than two values."""
    if len(values) <= 1:
        return 0.0
    return math.sqrt(_sum_of_squares(values) / (len(values) - 1))


def stdevp(*values: float) -> float:
    """Population standard deviation (n divisor); 0 for no values."""
    if not values:
        return 0.0
    return math.sqrt(_sum_of_squares(values) / len(values))


def root(index: float, value: float) -> float:
    """value ** (1/index)."""
    if index == 0:
        raise ValueError("Zeroth root is undefined")
    return math.pow(value, 1.0 / index)


def round_half_up(x: float) -> float:
    """Round to the nearest integer, halves towards positive infinity."""
    return float(math.floor(x + 0.5))


def _degrees_in(func: Callable[[float], float]) -> Callable[[float], float]:
    def wrapped(x: float) -> float:
        return func(math.radians(x))

    wrapped.__name__ = f"{func.__name__}_degrees"
    return wrapped


def _degrees_out(func: Callable[[float], float]) -> Callable[[float], float]:
    def wrapped(x: float) -> float:
        return math.degrees(func(x))

    wrapped.__name__ = f"{func.__name__}_degrees"
    return wrapped


FUNCTIONS: dict[str, Callable[..., float]] = {
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "asin": math.asin,
    "acos": math.acos,
    "atan": math.atan,
    "sqrt": math.sqrt,
    "abs": math.fabs,
    "round": round_half_up,
    "ln": math.log,
    "log": math.log10,
    "exp": math.exp,
    "fact": fact,
    "root": root,
    "nCr": nCr,
    "nPr": nPr,
    "mean": mean,
    "stdev": stdev,
    "stdevp": stdevp,
}

# Used in place of the radian versions when the angle unit is degrees.
# Forward trig converts its argument, inverse trig its result.
DEGREE_FUNCTIONS: dict[str, Callable[[float], float]] = {
    "sin": _degrees_in(math.sin),
    "cos": _degrees_in(math.cos),
    "tan": _degrees_in(math.tan),
    "asin": _degrees_out(math.asin),
    "acos": _degrees_out(math.acos),
    "atan": _degrees_out(math.atan),
}

CONSTANTS: dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
}
