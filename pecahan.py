#!/usr/bin/env python3
"""
Kalkulator Pecahan - Fraction-aware Expression Calculator

Main entry point for the Kalkulator Pecahan application.
This file serves as a thin wrapper that delegates all functionality
to the pecahan_pkg package.

Usage:
    python pecahan.py                    # Interactive REPL
    python pecahan.py -e "7/6"           # Evaluate expression
    python pecahan.py -d -e "sin(30)"    # Degree mode
    python pecahan.py --help             # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for Kalkulator Pecahan.

    Delegates all functionality to the pecahan_pkg.cli module,
    which handles argument parsing, expression evaluation, and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    from pecahan_pkg.cli import main_entry

    return main_entry()


if __name__ == "__main__":
    sys.exit(main())
