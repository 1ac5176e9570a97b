"""Exact rational forms of floating point results.

This module handles:
- Best low-denominator fraction for a float (continued fractions)
- Decimal expansion of a fraction with repeating-cycle detection
- Repeating decimal notation, e.g. 0.(3) and 1.1(6)
- Casio-style rational multiples of pi, e.g. 3*pi/4

A value with no fraction inside the denominator bound is not an error:
callers simply get None and show the decimal form only.
"""

from __future__ import annotations

import math
from fractions import Fraction

import sympy as sp

from .config import (
    FRACTION_TOLERANCE,
    FRACTION_ULP_GUARD,
    MAX_CF_ITERATIONS,
    MAX_DECIMAL_DIGITS,
    MAX_DENOMINATOR,
    PI_MAX_DENOMINATOR,
)
from .types import DecimalExpansion


def _matches(
    h: int, k: int, exact: Fraction, x: float, tolerance: float | None = None
) -> bool:
    """Whether h/k reproduces x.

    The comparison is exact against the binary value of x. Besides the
    absolute tolerance, an error of one ulp is forgiven (a true p/q rounded
    to a float is never further away) but only while k*k*ulp(x) is tiny,
    so large irrational values cannot pass as a fraction by accident.
    """
    base = FRACTION_TOLERANCE if tolerance is None else tolerance
    error = abs(Fraction(h, k) - exact)
    if error <= base:
        return True
    ulp = math.ulp(x)
    return k * k * ulp <= FRACTION_ULP_GUARD and error <= ulp


def to_fraction(
    x: float,
    max_denominator: int | None = None,
    tolerance: float | None = None,
    max_iterations: int | None = None,
) -> Fraction | None:
    """Find the best fraction approximating x with a bounded denominator.

    Walks the continued fraction expansion of x, building convergents
    h_i/k_i with h_i = a_i*h_(i-1) + h_(i-2) (same for k), and stops when:
    - the convergent matches x within the tolerance,
    - the next denominator would exceed max_denominator (the last
      convergent inside the bound is returned), or
    - max_iterations terms have been used.

    The partial quotients a_i are taken from the exact binary value of x,
    so repeated reciprocals do not accumulate rounding error.

    Args:
        x: Value to approximate
        max_denominator: Largest allowed denominator (default: MAX_DENOMINATOR)
        tolerance: Match tolerance (default: FRACTION_TOLERANCE)
        max_iterations: Continued fraction terms (default: MAX_CF_ITERATIONS)

    Returns:
        Reduced Fraction, or None if x is not finite or no convergent fits
        inside the bound. The result is the best candidate, not a proof of
        exactness; see is_exact_fraction().
    """
    if max_denominator is None:
        max_denominator = MAX_DENOMINATOR
    if max_iterations is None:
        max_iterations = MAX_CF_ITERATIONS
    if not math.isfinite(x) or max_denominator < 1:
        return None

    exact = Fraction(x)
    nearest = round(x)
    if _matches(nearest, 1, exact, x, tolerance):
        return Fraction(nearest, 1)

    a = math.floor(exact)
    h_prev, k_prev = 1, 0
    h, k = a, 1
    remainder = exact - a
    for _ in range(max_iterations):
        if remainder == 0 or _matches(h, k, exact, x, tolerance):
            break
        inverse = 1 / remainder
        a = math.floor(inverse)
        h_next = a * h + h_prev
        k_next = a * k + k_prev
        if k_next > max_denominator:
            break
        h_prev, k_prev, h, k = h, k, h_next, k_next
        remainder = inverse - a
    return Fraction(h, k)


def is_exact_fraction(
    frac: Fraction, x: float, tolerance: float | None = None
) -> bool:
    """Whether frac reproduces x within the reconstruction tolerance."""
    if not math.isfinite(x):
        return False
    return _matches(frac.numerator, frac.denominator, Fraction(x), x, tolerance)


def expand_decimal(
    num: int, den: int, max_digits: int | None = None
) -> DecimalExpansion:
    """Long-divide num/den and split the digits into non-repeating and repeating groups.

    Each remainder is recorded with the position of the digit it produces;
    when a remainder comes back, the digits from its first position onward
    form the cycle. Negative values keep their sign on the integer part
    and expand |num|/den.

    Args:
        num: Numerator
        den: Denominator, must be positive
        max_digits: Digit limit (default: MAX_DECIMAL_DIGITS)

    Returns:
        DecimalExpansion; truncated=True if the digit limit was reached first

    Raises:
        ValueError: If den is not positive
    """
    if max_digits is None:
        max_digits = MAX_DECIMAL_DIGITS
    num, den = int(num), int(den)
    if den <= 0:
        raise ValueError("Denominator must be positive")

    sign = "-" if num < 0 else ""
    integer_part, remainder = divmod(abs(num), den)
    integer_text = f"{sign}{integer_part}"
    digits: list[str] = []
    seen: dict[int, int] = {}
    while remainder:
        if remainder in seen:
            start = seen[remainder]
            return DecimalExpansion(
                integer_text, "".join(digits[:start]), "".join(digits[start:])
            )
        if len(digits) >= max_digits:
            return DecimalExpansion(integer_text, "".join(digits), truncated=True)
        seen[remainder] = len(digits)
        digit, remainder = divmod(remainder * 10, den)
        digits.append(str(digit))
    return DecimalExpansion(integer_text, "".join(digits))


def render_repeating(expansion: DecimalExpansion) -> str:
    """Render an expansion with the cycle in parentheses: 0.(3), 1.1(6), 1.25."""
    text = expansion.integer_part
    if expansion.non_repeating or expansion.repeating:
        text += "." + expansion.non_repeating
    if expansion.repeating:
        text += f"({expansion.repeating})"
    if expansion.truncated:
        text += "..."
    return text


def find_pi_fraction_form(
    x: float, max_denominator: int | None = None
) -> str | None:
    """Find if x is a small rational multiple of pi and return that form.

    Returns forms like "pi/2", "3*pi/4" or "-pi", None otherwise.
    """
    if max_denominator is None:
        max_denominator = PI_MAX_DENOMINATOR
    if not math.isfinite(x) or abs(x) < 1e-10:
        return None
    coeff = x / math.pi
    frac = to_fraction(coeff, max_denominator)
    if frac is None or frac == 0 or not is_exact_fraction(frac, coeff):
        return None
    return str(sp.Rational(frac.numerator, frac.denominator) * sp.pi)
