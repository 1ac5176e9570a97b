from __future__ import annotations

import argparse
import json

from .config import GENERIC_ERROR_MESSAGE, VERSION
from .formatting import format_number
from .logging_config import get_logger
from .session import CalculatorSession
from .types import AngleUnit, DisplayResult, EvalResult

logger = get_logger("cli")

REPL_COMMANDS = {
    "help",
    "deg",
    "rad",
    "ans",
    "history",
    "clear",
    "quit",
    "exit",
}


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running Kalkulator Pecahan health check...")
    print("-" * 50)

    try:
        import sympy as sp

        print(f"[OK] SymPy {sp.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] SymPy import failed: {e}")
        checks_failed += 1

    try:
        from .worker import evaluate_safely

        result = evaluate_safely("3*3")
        if result.ok and result.value == 9:
            print("[OK] Basic evaluation works")
            checks_passed += 1
        else:
            print(f"[FAIL] Evaluation check failed: {result}")
            checks_failed += 1
    except Exception as e:
        print(f"[FAIL] Evaluation check failed: {e}")
        checks_failed += 1

    try:
        from .api import evaluate_expression

        result = evaluate_expression("1/3")
        if result.ok and result.repeating_decimal_text == "0.(3)":
            print("[OK] Fraction reconstruction works")
            checks_passed += 1
        else:
            print(f"[FAIL] Fraction check failed: {result}")
            checks_failed += 1
    except Exception as e:
        print(f"[FAIL] Fraction check failed: {e}")
        checks_failed += 1

    print("-" * 50)
    print(f"Results: {checks_passed} passed, {checks_failed} failed")

    if checks_failed > 0:
        print("\n[WARN] Some health checks failed. Core functionality may be impaired.")
        return 1

    print("\n[OK] All health checks passed!")
    return 0


def print_result_pretty(
    res: DisplayResult | EvalResult, output_format: str = "human"
) -> None:
    """Print result in specified format.

    Args:
        res: Result of evaluate_expression()
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(res.to_dict(), indent=2, ensure_ascii=False))
        return
    if not res.ok:
        print("Error:", res.error or GENERIC_ERROR_MESSAGE)
        return
    print(res.decimal_text)
    if res.fraction is not None:
        print("Fraction:", res.fraction_text)
    if res.repeating_decimal_text is not None:
        print("Decimal:", res.repeating_decimal_text)
    if res.pi_fraction_text is not None:
        print("Exact:", res.pi_fraction_text)
    if res.fraction is None and res.pi_fraction_text is None and not res.value.is_integer():
        print("(no exact fraction within limits)")


def print_help_text() -> None:
    """Print help text for REPL commands."""
    help_text = f"""Kalkulator Pecahan version {VERSION}

Expressions:
  2(3+1)        implicit multiplication      -> 8
  5!            factorial                    -> 120
  50%           percent                      -> 0.5
  2^10, 2**10   power                        -> 1024
  7/6           fraction and repeating form  -> 7/6, 1.1(6)
  ANS*2         previous answer

Functions:
  sin cos tan asin acos atan sqrt abs round ln log exp
  fact(n) nCr(n,k) nPr(n,k) root(index,value)
  mean(...) stdev(...) stdevp(...)
  Constants: pi (or π), e

Commands:
  deg / rad     switch angle unit
  ans           show previous answer
  history       show recent results
  clear         clear history
  help          show this text
  quit / exit   leave
"""
    print(help_text)


def _print_history(session: CalculatorSession) -> None:
    entries = session.history
    if not entries:
        print("(history is empty)")
        return
    for entry in entries:
        shown = entry.result.decimal_text if entry.ok else "undefined"
        print(f"{entry.expression} = {shown}")


def _handle_command(command: str, session: CalculatorSession) -> bool:
    """Run a REPL command. Returns False when the loop should stop."""
    if command in ("quit", "exit"):
        return False
    if command == "help":
        print_help_text()
    elif command == "deg":
        session.set_angle_unit(AngleUnit.DEGREES)
        print("Angle unit: degrees")
    elif command == "rad":
        session.set_angle_unit(AngleUnit.RADIANS)
        print("Angle unit: radians")
    elif command == "ans":
        if session.previous_answer is None:
            print("ANS = (none)")
        else:
            print(f"ANS = {format_number(session.previous_answer)}")
    elif command == "history":
        _print_history(session)
    elif command == "clear":
        session.clear_history()
        print("History cleared")
    return True


def repl_loop(session: CalculatorSession, output_format: str = "human") -> None:
    """Interactive REPL loop with graceful interrupt handling."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows - that's fine
        pass

    print("Kalkulator Pecahan - type 'help' for commands, 'quit' to exit.")
    while True:
        try:
            raw = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        if not raw:
            continue
        command = raw.lower()
        if command in REPL_COMMANDS:
            if not _handle_command(command, session):
                print("Goodbye.")
                break
            continue
        result = session.evaluate(raw)
        if result is not None:
            print_result_pretty(result, output_format=output_format)


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for Kalkulator Pecahan CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="pecahan")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Evaluate one expression and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-d",
        "--degrees",
        action="store_true",
        help="Interpret trigonometric angles in degrees",
    )
    parser.add_argument(
        "--ans", type=float, help="Value substituted for ANS in the first expression"
    )
    parser.add_argument(
        "--max-denominator",
        type=int,
        help="Largest denominator for fraction results (default: 10000)",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (default: PECAHAN_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    args = parser.parse_args(argv)

    from .logging_config import setup_logging

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()

    max_denominator = None
    if args.max_denominator and args.max_denominator > 0:
        max_denominator = args.max_denominator
    session = CalculatorSession(
        angle_unit=AngleUnit.DEGREES if args.degrees else AngleUnit.RADIANS,
        max_denominator=max_denominator,
    )
    session.previous_answer = args.ans

    if args.eval_expr is not None:
        expr = args.eval_expr.strip()
        # Remove ">>>" prompt if present
        if expr.startswith(">>>"):
            expr = expr[3:].strip()
        if not expr:
            print("Error: Empty input. Please enter a valid expression.")
            return 1
        logger.debug("Evaluating %r from the command line", expr)
        result = session.evaluate(expr)
        print_result_pretty(result, output_format=args.format)
        return 0 if result.ok else 1

    repl_loop(session, output_format=args.format)
    return 0


if __name__ == "__main__":
    """Allow running the CLI module directly with python -m pecahan_pkg.cli"""
    import sys

    sys.exit(main_entry())
