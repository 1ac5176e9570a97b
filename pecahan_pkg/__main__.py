"""Main entry point for running pecahan_pkg as a module.

This allows running Kalkulator Pecahan with:
    python -m pecahan_pkg
    python -m pecahan_pkg --health-check
    python -m pecahan_pkg -e "7/6"

This is equivalent to running:
    python -m pecahan_pkg.cli
    python pecahan.py
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
