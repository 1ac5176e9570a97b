"""Public API for Kalkulator Pecahan - returns structured objects without side effects."""

from __future__ import annotations

from .formatting import format_result
from .logging_config import get_logger
from .parser import parse_preprocessed, preprocess
from .types import (
    DEFAULT_MODE,
    DisplayResult,
    EvalResult,
    EvaluationMode,
    ParseError,
    ValidationError,
)
from .worker import evaluate_safely

logger = get_logger("api")


def evaluate_expression(
    expression: str,
    mode: EvaluationMode = DEFAULT_MODE,
    max_denominator: int | None = None,
) -> DisplayResult | EvalResult:
    """Evaluate a raw expression: normalize, evaluate, then format.

    Args:
        expression: Raw expression string (e.g., "2(3+1)", "50%", "sin(90)")
        mode: Angle unit and previous answer for this call
        max_denominator: Denominator bound for the fraction form

    Returns:
        DisplayResult on success, EvalResult(ok=False) on any failure

    Example:
        >>> from pecahan_pkg.api import evaluate_expression
        >>> result = evaluate_expression("7/6")
        >>> print(result.decimal_text, result.fraction_text, result.repeating_decimal_text)
        1.16666666667 7/6 1.1(6)
    """
    canonical = preprocess(expression, mode)
    logger.debug("Normalized %r to %r", expression, canonical)
    return format_result(evaluate_safely(canonical, mode.angle_unit), max_denominator)


def validate_expression(
    expression: str, mode: EvaluationMode = DEFAULT_MODE
) -> tuple[bool, str | None]:
    """Validate an expression without evaluating it.

    Args:
        expression: Expression string to validate
        mode: Mode used for normalization

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> from pecahan_pkg.api import validate_expression
        >>> validate_expression("2 + 2")
        (True, None)
        >>> validate_expression("__import__('os')")[0]
        False
    """
    try:
        parse_preprocessed(preprocess(expression, mode))
        return True, None
    except (ParseError, ValidationError) as e:
        return False, str(e)
    except RecursionError:
        return False, "Expression too deeply nested"
