#!/usr/bin/env python3
"""
Advanced Calculator - math, linear algebra and geometry from plain text

Main entry point for the calculator application.
This file serves as a thin wrapper that delegates all functionality
to the calculator_pkg package.

Usage:
    python calculator.py                       # Interactive REPL
    python calculator.py -e "sin(30)"          # Evaluate expression
    python calculator.py -a radians -e "sin(1)"
    python calculator.py --help                # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for the calculator.

    Delegates all functionality to the calculator_pkg.cli module,
    which handles argument parsing, expression evaluation, and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from calculator_pkg.cli import main_entry
    except ImportError as e:
        print(f"Error: Failed to import calculator_pkg: {e}")
        print("Please ensure all dependencies are installed: pip install -e .")
        return 1

    try:
        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
