"""Kalkulator Pecahan package: expression normalizer, evaluator, fraction reconstruction, and CLI."""

__all__ = [
    "config",
    "parser",
    "functions",
    "worker",
    "rational",
    "formatting",
    "session",
    "cli",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "evaluate_expression",
    "validate_expression",
    "CalculatorSession",
]
