"""Interactive calculator session.

The core functions are pure; a session is the caller that threads the
previous answer from one evaluation into the next, remembers the angle
unit, and keeps a short in-memory history (newest first).
"""

from __future__ import annotations

from collections import deque

from .api import evaluate_expression
from .config import HISTORY_SIZE
from .logging_config import get_logger
from .types import AngleUnit, DisplayResult, EvalResult, EvaluationMode, HistoryEntry

logger = get_logger("session")


class CalculatorSession:
    """Stateful wrapper around evaluate_expression()."""

    def __init__(
        self,
        angle_unit: AngleUnit = AngleUnit.RADIANS,
        history_size: int = HISTORY_SIZE,
        max_denominator: int | None = None,
    ):
        self.angle_unit = angle_unit
        self.previous_answer: float | None = None
        self.max_denominator = max_denominator
        self._history: deque[HistoryEntry] = deque(maxlen=history_size)

    @property
    def mode(self) -> EvaluationMode:
        return EvaluationMode(
            angle_unit=self.angle_unit, previous_answer=self.previous_answer
        )

    @property
    def history(self) -> list[HistoryEntry]:
        return list(self._history)

    def evaluate(self, expression: str) -> DisplayResult | EvalResult | None:
        """Evaluate one line and record it.

        Blank input is ignored and returns None. The previous answer is only
        replaced by successful results; failures are still recorded in the
        history.
        """
        expression = expression.strip()
        if not expression:
            return None
        result = evaluate_expression(expression, self.mode, self.max_denominator)
        if isinstance(result, DisplayResult):
            self.previous_answer = result.value
        self._history.appendleft(HistoryEntry(expression, result))
        return result

    def set_angle_unit(self, angle_unit: AngleUnit) -> None:
        self.angle_unit = angle_unit
        logger.info("Angle unit set to %s", angle_unit.value)

    def toggle_angle_unit(self) -> AngleUnit:
        if self.angle_unit is AngleUnit.RADIANS:
            self.set_angle_unit(AngleUnit.DEGREES)
        else:
            self.set_angle_unit(AngleUnit.RADIANS)
        return self.angle_unit

    def clear_history(self) -> None:
        self._history.clear()
