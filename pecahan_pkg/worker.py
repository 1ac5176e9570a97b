"""Evaluate canonical expressions against the fixed function library."""

from __future__ import annotations

import math
from typing import Callable

from .config import GENERIC_ERROR_MESSAGE
from .functions import CONSTANTS, DEGREE_FUNCTIONS, FUNCTIONS
from .logging_config import get_logger
from .parser import BinOp, Call, Node, Num, UnaryOp, parse_preprocessed
from .types import AngleUnit, EvalResult, EvaluationError, ParseError, ValidationError

logger = get_logger("worker")


def _binary(op: str, left: float, right: float) -> float:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    if op == "/":
        return left / right
    if op == "**":
        # math.pow raises instead of returning a complex number for (-8)**(1/3)
        return math.pow(left, right)
    raise EvaluationError(f"Unknown operator {op!r}")


def _resolve(name: str, angle_unit: AngleUnit) -> Callable[..., float]:
    if angle_unit is AngleUnit.DEGREES and name in DEGREE_FUNCTIONS:
        return DEGREE_FUNCTIONS[name]
    return FUNCTIONS[name]


def evaluate_node(node: Node, angle_unit: AngleUnit = AngleUnit.RADIANS) -> float:
    """Interpret an AST produced by parse_preprocessed().

    Trig calls use degrees for their angles when angle_unit is DEGREES.

    Raises:
        EvaluationError: If an intermediate value is not finite
        ValueError, OverflowError, ZeroDivisionError: From the arithmetic itself
    """
    if isinstance(node, Num):
        value = node.value
    elif isinstance(node, UnaryOp):
        operand = evaluate_node(node.operand, angle_unit)
        value = -operand if node.op == "-" else operand
    elif isinstance(node, BinOp):
        value = _binary(
            node.op,
            evaluate_node(node.left, angle_unit),
            evaluate_node(node.right, angle_unit),
        )
    elif isinstance(node, Call):
        if not node.args and node.name in CONSTANTS:
            value = CONSTANTS[node.name]
        else:
            args = [evaluate_node(arg, angle_unit) for arg in node.args]
            value = _resolve(node.name, angle_unit)(*args)
    else:
        raise EvaluationError(f"Unsupported node {type(node).__name__}")
    if not math.isfinite(value):
        raise EvaluationError("Result is not a finite number")
    return value


def evaluate_safely(
    expr: str, angle_unit: AngleUnit = AngleUnit.RADIANS
) -> EvalResult:
    """Evaluate a canonical expression.

    All failures collapse to a single opaque error; the expression is never
    echoed back in the result.

    Args:
        expr: Canonical expression (output of parser.preprocess)
        angle_unit: Unit of the angles taken and returned by trig calls

    Returns:
        EvalResult with the float value, or ok=False
    """
    try:
        value = evaluate_node(parse_preprocessed(expr), angle_unit)
    except (ParseError, ValidationError) as e:
        logger.debug("Rejected expression (%s): %s", e.code, e.message)
        return _failure()
    except (EvaluationError, ArithmeticError, ValueError, TypeError) as e:
        logger.debug("Evaluation failed: %s: %s", type(e).__name__, e)
        return _failure()
    except RecursionError:
        logger.debug("Evaluation failed: expression nested too deeply")
        return _failure()
    except Exception as e:
        logger.error(f"Unexpected evaluation error: {e}", exc_info=True)
        return _failure()
    if value == 0:
        value = 0.0  # drop the sign of -0.0
    return EvalResult(ok=True, value=value)


def _failure() -> EvalResult:
    return EvalResult(ok=False, error=GENERIC_ERROR_MESSAGE, error_code="EVAL_ERROR")
