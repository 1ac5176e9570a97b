"""Type definitions and result dataclasses for consistent API responses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Any


class AngleUnit(str, Enum):
    """How trigonometric arguments are interpreted."""

    RADIANS = "rad"
    DEGREES = "deg"


@dataclass(frozen=True)
class EvaluationMode:
    """Per-call evaluation context supplied by the caller."""

    angle_unit: AngleUnit = AngleUnit.RADIANS
    previous_answer: float | None = None


DEFAULT_MODE = EvaluationMode()


@dataclass
class EvalResult:
    """Result of evaluating a canonical expression."""

    ok: bool
    value: float | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.value is not None:
            result_dict["value"] = self.value
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"EvalResult(ok=False, error={self.error!r})"
        return f"EvalResult(ok=True, value={self.value!r})"


@dataclass
class DecimalExpansion:
    """Decimal digits of a fraction, split into non-repeating and repeating groups.

    ``truncated`` is set when the digit limit was reached before the expansion
    terminated or a cycle was found; the digits are then only a prefix.
    """

    integer_part: str
    non_repeating: str = ""
    repeating: str = ""
    truncated: bool = False

    @property
    def terminates(self) -> bool:
        return not self.repeating and not self.truncated


@dataclass
class DisplayResult:
    """Display-ready form of a successful evaluation."""

    value: float
    decimal_text: str
    fraction: Fraction | None = None
    repeating_decimal_text: str | None = None
    pi_fraction_text: str | None = None

    @property
    def ok(self) -> bool:
        return True

    @property
    def fraction_text(self) -> str | None:
        if self.fraction is None:
            return None
        return f"{self.fraction.numerator}/{self.fraction.denominator}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {
            "ok": True,
            "value": self.value,
            "decimal": self.decimal_text,
        }
        if self.fraction is not None:
            result_dict["fraction"] = {
                "num": self.fraction.numerator,
                "den": self.fraction.denominator,
            }
        if self.repeating_decimal_text is not None:
            result_dict["repeating"] = self.repeating_decimal_text
        if self.pi_fraction_text is not None:
            result_dict["pi_fraction"] = self.pi_fraction_text
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        parts = [f"decimal_text={self.decimal_text!r}"]
        if self.fraction is not None:
            parts.append(f"fraction={self.fraction_text!r}")
        if self.repeating_decimal_text is not None:
            parts.append(f"repeating_decimal_text={self.repeating_decimal_text!r}")
        if self.pi_fraction_text is not None:
            parts.append(f"pi_fraction_text={self.pi_fraction_text!r}")
        return f"DisplayResult({', '.join(parts)})"


@dataclass
class HistoryEntry:
    """One evaluated line kept by a session."""

    expression: str
    result: DisplayResult | EvalResult

    @property
    def ok(self) -> bool:
        return self.result.ok


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ParseError(Exception):
    """Raised when parsing fails."""

    def __init__(self, message: str, code: str = "PARSE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class EvaluationError(Exception):
    """Raised when a parsed expression cannot produce a finite number."""

    def __init__(self, message: str, code: str = "EVAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message
