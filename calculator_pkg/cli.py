from __future__ import annotations

import argparse
import json
import sys

from .config import DEFAULT_ANGLE_MODE, VERSION
from .logging_config import get_logger
from .session import CalculatorSession
from .types import AngleMode, CalculationResult

logger = get_logger("cli")


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running calculator health check...")
    print("-" * 50)

    # Check SymPy import
    try:
        import sympy as sp

        print(f"[OK] SymPy {sp.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] SymPy import failed: {e}")
        checks_failed += 1

    from .api import calculate

    checks = [
        ("Arithmetic", "3 * 3", AngleMode.DEGREES, "9"),
        ("Trigonometry (degrees)", "sin(30)", AngleMode.DEGREES, "0.5"),
        ("Linear equation", "2x + 3 = 7", AngleMode.DEGREES, "x = 2"),
        ("Geometry", "distance (0,0) (3,4)", AngleMode.DEGREES, "5 units"),
    ]
    for label, expr, mode, expected in checks:
        result = calculate(expr, mode)
        if result.ok and result.result == expected:
            print(f"[OK] {label} works")
            checks_passed += 1
        else:
            print(f"[FAIL] {label} check failed: {result!r}")
            checks_failed += 1

    print("-" * 50)
    print(f"Results: {checks_passed} passed, {checks_failed} failed")

    if checks_failed > 0:
        print("\n[WARN] Some health checks failed. Core functionality may be impaired.")
        return 1

    print("\n[OK] All health checks passed!")
    return 0


def print_result_pretty(res: CalculationResult, output_format: str = "human") -> None:
    """Print result in specified format.

    Args:
        res: Calculation result
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(res.to_dict(), indent=2, ensure_ascii=False))
        return
    if not res.ok:
        kind = res.error_kind.value if res.error_kind else "Error"
        print(f"Error ({kind}): {res.message}")
        return
    print(res.result)


def print_history(session: CalculatorSession) -> None:
    if not session.history:
        print("No calculations yet")
        return
    for index, entry in enumerate(session.history, start=1):
        print(f"{index:>3}. {entry.expression} = {entry.result}  [{entry.timestamp}]")


def print_help_text() -> None:
    print(
        """Enter an expression and press Enter.

Math:       2 + 3 * 4, 2(3+4), 2PI, sqrt(16), 2^10, factorial(5)
            sin(30), asin(0.5), log(100), ln(E), exp(1), abs(-3), round(2.5)
Algebra:    2x + 3 = 7, solve(...), expand((a+b)^2)
Geometry:   area circle r=5, area triangle a=3 b=4 c=5, area rectangle l=5 w=3
            volume sphere r=5, volume cylinder r=3 h=5, perimeter circle r=5
            distance (0,0) (3,4)

Commands:
  mode                    toggle between degrees and radians
  mode degrees|radians    set the angle mode
  history                 list previous results (newest first)
  !N                      re-run history entry N
  clearhistory            forget all previous results
  help                    show this text
  quit, exit              leave the calculator"""
    )


def _handle_command(raw: str, session: CalculatorSession) -> bool:
    """Run a REPL command. Returns False if ``raw`` is not a command."""
    lowered = raw.lower()
    if lowered == "help":
        print_help_text()
    elif lowered == "history":
        print_history(session)
    elif lowered == "clearhistory":
        session.clear_history()
        print("History cleared")
    elif lowered == "mode":
        print(f"Angle mode: {session.toggle_angle_mode().value}")
    elif lowered.startswith("mode "):
        try:
            mode = session.set_angle_mode(lowered[5:])
            print(f"Angle mode: {mode.value}")
        except ValueError as e:
            print(f"Error: {e}")
    else:
        return False
    return True


def repl_loop(session: CalculatorSession, output_format: str = "human") -> None:
    """Interactive REPL loop with graceful interrupt handling."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows - that's fine
        pass

    print(
        f"Calculator ({session.angle_mode.value}) - type 'help' for commands, "
        "'quit' to exit."
    )
    while True:
        try:
            raw = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        if not raw:
            continue
        if raw.lower() in ("quit", "exit"):
            print("Goodbye.")
            break
        if _handle_command(raw, session):
            continue
        if raw.startswith("!") and raw[1:].isdigit():
            try:
                raw = session.recall(int(raw[1:]))
            except IndexError as e:
                print(f"Error: {e}")
                continue
            print(raw)
        print_result_pretty(session.calculate(raw), output_format)


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the calculator CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="calculator")
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
        "-a",
        "--angle-mode",
        type=str,
        choices=[mode.value for mode in AngleMode],
        default=None,
        help=f"Angle mode for trigonometry (default: {DEFAULT_ANGLE_MODE})",
    )
    parser.add_argument(
        "--no-history",
        action="store_true",
        help="Do not load or save calculation history",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
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

    session = CalculatorSession(
        angle_mode=args.angle_mode or DEFAULT_ANGLE_MODE,
        persist=not args.no_history,
    )

    if args.eval_expr is not None:
        expr = args.eval_expr.strip()
        if not expr:
            print("Error: Empty input. Please enter a valid expression.")
            return 1
        logger.debug("Evaluating %r in %s mode", expr, session.angle_mode.value)
        result = session.calculate(expr)
        print_result_pretty(result, args.format)
        return 0 if result.ok else 1

    repl_loop(session, args.format)
    return 0


if __name__ == "__main__":
    sys.exit(main_entry())
