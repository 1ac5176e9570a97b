"""Centralized configuration for Kalkulator Pecahan.

This module defines:
- Rational reconstruction limits (denominator bound, digit limit, tolerance)
- Display precision
- Input validation limits (length, nesting depth)
- Guards for the combinatorics helpers
- Whitelisted function and constant names
- Regex patterns for expression normalization

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with PECAHAN_)
"""

import os
import re

try:
    import importlib.metadata

    VERSION = importlib.metadata.version("kalkulator-pecahan")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Rational reconstruction
MAX_DENOMINATOR = int(os.getenv("PECAHAN_MAX_DENOMINATOR", "10000"))
MAX_DECIMAL_DIGITS = int(os.getenv("PECAHAN_MAX_DECIMAL_DIGITS", "2000"))
FRACTION_TOLERANCE = float(
    os.getenv("PECAHAN_FRACTION_TOLERANCE", "1e-12")
)  # Convergent must match the value this closely
FRACTION_ULP_GUARD = float(
    os.getenv("PECAHAN_FRACTION_ULP_GUARD", "1e-6")
)  # One-ulp rounding allowance only while den**2 * ulp(x) stays below this
MAX_CF_ITERATIONS = int(
    os.getenv("PECAHAN_MAX_CF_ITERATIONS", "80")
)  # Continued fraction terms
PI_MAX_DENOMINATOR = int(
    os.getenv("PECAHAN_PI_MAX_DENOMINATOR", "1000")
)  # For pi/2, 3*pi/4 style results

# Display
DISPLAY_PRECISION = int(
    os.getenv("PECAHAN_DISPLAY_PRECISION", "12")
)  # significant digits
INTEGER_DISPLAY_LIMIT = float(
    os.getenv("PECAHAN_INTEGER_DISPLAY_LIMIT", "1e21")
)  # larger integers are shown in exponent form
POSITIONAL_DISPLAY_MIN = 1e-6  # smaller magnitudes are shown in exponent form

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("PECAHAN_MAX_INPUT_LENGTH", "10000"))  # characters
MAX_EXPRESSION_DEPTH = int(
    os.getenv("PECAHAN_MAX_EXPRESSION_DEPTH", "100")
)  # parser nesting

# Function library guards
MAX_FACTORIAL_ARG = int(
    os.getenv("PECAHAN_MAX_FACTORIAL_ARG", "170")
)  # 171! overflows a float
MAX_COMBINATORIC_N = int(os.getenv("PECAHAN_MAX_COMBINATORIC_N", "10000"))

# Logging
LOG_LEVEL = os.getenv("PECAHAN_LOG_LEVEL", "WARNING").upper()
LOG_ROOT = "pecahan"

# Session
HISTORY_SIZE = int(os.getenv("PECAHAN_HISTORY_SIZE", "8"))

GENERIC_ERROR_MESSAGE = "Invalid expression or calculation error"


# Names callable from an expression, with their (min, max) argument counts.
# None as max means variadic.
FUNCTION_ARITY = {
    "sin": (1, 1),
    "cos": (1, 1),
    "tan": (1, 1),
    "asin": (1, 1),
    "acos": (1, 1),
    "atan": (1, 1),
    "sqrt": (1, 1),
    "abs": (1, 1),
    "round": (1, 1),
    "ln": (1, 1),
    "log": (1, 1),
    "exp": (1, 1),
    "fact": (1, 1),
    "root": (2, 2),
    "nCr": (2, 2),
    "nPr": (2, 2),
    "mean": (1, None),
    "stdev": (1, None),
    "stdevp": (1, None),
}

CONSTANT_NAMES = ("pi", "e")

# Normalization patterns, applied in order by parser.preprocess
PI_GLYPH = "π"
OPERATOR_GLYPHS = {
    "×": "*",
    "÷": "/",
    "−": "-",
    "–": "-",
    ":": "/",
}
PERCENT_REGEX = re.compile(r"(\d+(?:\.\d+)?)%")
ANS_REGEX = re.compile(r"\bANS\b")
# A group right after a name is a call, e.g. sin(30)!; the parser's postfix ! takes it
FACTORIAL_REGEX = re.compile(r"(?<![A-Za-z_])([0-9.]+|\([^()]*\))!")
DIGIT_PAREN_REGEX = re.compile(r"(\d)\s*\(")
PAREN_DIGIT_REGEX = re.compile(r"\)\s*(\d)")
PAREN_PAREN_REGEX = re.compile(r"\)\s*\(")

NUMBER_REGEX = re.compile(r"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
NAME_REGEX = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
