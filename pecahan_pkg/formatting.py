"""Turn evaluation results into display-ready structures."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from .config import (
    DISPLAY_PRECISION,
    INTEGER_DISPLAY_LIMIT,
    MAX_DENOMINATOR,
    POSITIONAL_DISPLAY_MIN,
)
from .rational import (
    expand_decimal,
    find_pi_fraction_form,
    is_exact_fraction,
    render_repeating,
    to_fraction,
)
from .types import DisplayResult, EvalResult


def format_number(val: Any, precision: int = DISPLAY_PRECISION) -> str:
    """Format a numeric value with specified precision.

    Magnitudes from POSITIONAL_DISPLAY_MIN up to INTEGER_DISPLAY_LIMIT are
    written out positionally ("0.00001", not "1e-05").

    Args:
        val: Numeric value to format
        precision: Number of significant digits (default: DISPLAY_PRECISION)

    Returns:
        Formatted string representation of the number
    """
    try:
        fmt = "{:." + str(int(precision)) + "g}"
        text = fmt.format(float(val))
    except (ValueError, TypeError, OverflowError):
        # Fallback for non-numeric or invalid values
        return str(val)
    magnitude = abs(float(text))
    if "e" in text and POSITIONAL_DISPLAY_MIN <= magnitude < INTEGER_DISPLAY_LIMIT:
        text = format(Decimal(text), "f")
    return text


def format_result(
    result: EvalResult, max_denominator: int | None = None
) -> DisplayResult | EvalResult:
    """Combine an evaluation result with its exact forms.

    Errors are returned unchanged. Integer values get only the decimal
    text. Other values are shown to DISPLAY_PRECISION significant digits,
    and when the unrounded value is an exact fraction within the
    denominator bound, the fraction and its repeating decimal are filled
    in too. Otherwise a rational multiple of pi is tried.

    Args:
        result: Output of worker.evaluate_safely()
        max_denominator: Denominator bound (default: MAX_DENOMINATOR)

    Returns:
        DisplayResult on success, the original EvalResult on error
    """
    if not result.ok or result.value is None:
        return result
    if max_denominator is None:
        max_denominator = MAX_DENOMINATOR

    value = result.value
    if value.is_integer():
        if abs(value) < INTEGER_DISPLAY_LIMIT:
            return DisplayResult(value=value, decimal_text=str(int(value)))
        return DisplayResult(value=value, decimal_text=format_number(value))

    display = DisplayResult(value=value, decimal_text=format_number(value))
    frac = to_fraction(value, max_denominator)
    if frac is not None and frac.denominator == 1 and is_exact_fraction(frac, value):
        # Float noise around an integer, e.g. tan(45 degrees)
        return display
    if (
        frac is not None
        and frac.denominator <= max_denominator
        and is_exact_fraction(frac, value)
    ):
        display.fraction = frac
        display.repeating_decimal_text = render_repeating(
            expand_decimal(frac.numerator, frac.denominator)
        )
    else:
        display.pi_fraction_text = find_pi_fraction_form(value)
    return display
