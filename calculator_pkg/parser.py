"""Input normalization, function rewriting and result formatting.

This module handles:
- Input validation (length, balanced parentheses)
- Notation normalization (display symbols, constants, implicit multiplication)
- Rewriting named functions into the evaluator's qualified names
- Result formatting (fixed decimals, superscripts)

Rewriting is regex driven. Each pass scans the text once and never rescans its
own output, and a function argument runs up to the first ``)``, so nested calls
of the same function are only partially rewritten.
"""

from __future__ import annotations

import math
import re

from .config import (
    DIGIT_CONSTANT_REGEX,
    DIGIT_PAREN_REGEX,
    FACTORIAL_NAME,
    FUNC_PREFIX,
    MAX_INPUT_LENGTH,
    OUTPUT_DECIMALS,
    PAREN_DIGIT_REGEX,
    POWER_REGEX,
)
from .logging_config import get_logger
from .types import AngleMode, InvalidExpressionError

logger = get_logger("parser")

SYMBOL_MAP = {
    "×": "*",
    "÷": "/",
    "−": "-",
    "π": "PI",
}

TRIG_FUNCTIONS = ("sin", "cos", "tan")
INVERSE_TRIG_FUNCTIONS = ("asin", "acos", "atan")
LOG_FUNCTIONS = {"log": "math.log10", "ln": "math.log", "exp": "math.exp"}
DIRECT_FUNCTIONS = ("sqrt", "abs", "floor", "ceil", "round")


def _call_regex(name: str) -> re.Pattern[str]:
    return re.compile(FUNC_PREFIX + name + r"\(([^)]+)\)")


_TRIG_REGEXES = {name: _call_regex(name) for name in TRIG_FUNCTIONS}
_INVERSE_TRIG_REGEXES = {name: _call_regex(name) for name in INVERSE_TRIG_FUNCTIONS}
_LOG_REGEXES = {name: _call_regex(name) for name in LOG_FUNCTIONS}
_DIRECT_REGEXES = {name: _call_regex(name) for name in DIRECT_FUNCTIONS}
_FACTORIAL_REGEX = _call_regex("factorial")


def superscriptify(input_str: str) -> str:
    """Convert numeric string to Unicode superscript characters.

    Args:
        input_str: Input string with digits and '-' (e.g., "123", "-5")

    Returns:
        String with superscript Unicode characters (e.g., "¹²³", "⁻⁵")
    """
    mapping = {
        "0": "⁰",
        "1": "¹",
        "2": "²",
        "3": "³",
        "4": "⁴",
        "5": "⁵",
        "6": "⁶",
        "7": "⁷",
        "8": "⁸",
        "9": "⁹",
        "-": "⁻",
    }
    return "".join(mapping.get(char, char) for char in input_str)


def format_result(value: float) -> str:
    """Format a numeric result deterministically.

    Integer values are printed without a fractional part. Everything else is
    rounded to ``OUTPUT_DECIMALS`` places with trailing zeros removed. The
    output never uses exponential notation.

    Args:
        value: Finite number to format

    Returns:
        Formatted string (e.g., 78.53981633974483 -> "78.5398163397")

    Raises:
        InvalidExpressionError: If the value is NaN or infinite
    """
    value = float(value)
    if not math.isfinite(value):
        raise InvalidExpressionError("Invalid calculation")
    if value.is_integer():
        return str(int(value))
    rounded = float(f"{value:.{OUTPUT_DECIMALS}f}")
    if rounded.is_integer():
        return str(int(rounded))
    return f"{rounded:.{OUTPUT_DECIMALS}f}".rstrip("0").rstrip(".")


def is_balanced(input_str: str) -> tuple[bool, int | None]:
    """Check if parentheses/brackets are balanced. Returns (is_balanced, error_position)."""
    pairs = {"(": ")", "[": "]", "{": "}"}
    stack: list[tuple[str, int]] = []  # (char, position)
    for i, char in enumerate(input_str):
        if char in pairs:
            stack.append((char, i))
        elif char in pairs.values():
            if not stack:
                return False, i
            opening, _ = stack.pop()
            if pairs[opening] != char:
                return False, i
    if stack:
        return False, stack[0][1]  # Return position of first unmatched
    return True, None


def normalize(expr: str) -> str:
    """Rewrite display notation into plain arithmetic text.

    Applies, in order:
    - Display symbols: × -> *, ÷ -> /, − -> -, π -> PI
    - Implicit multiplication: 2( -> 2*(, )2 -> )*2, 2PI -> 2*PI, 2E -> 2*E
    - Constants: the literal tokens PI and E become their numeric values

    ``PI(`` and a constant next to a function name are left alone.
    """
    for symbol, replacement in SYMBOL_MAP.items():
        expr = expr.replace(symbol, replacement)

    expr = DIGIT_PAREN_REGEX.sub(r"\1*(", expr)
    expr = PAREN_DIGIT_REGEX.sub(r")*\1", expr)
    expr = DIGIT_CONSTANT_REGEX.sub(r"\1*\2", expr)

    expr = expr.replace("PI", repr(math.pi))
    expr = expr.replace("E", repr(math.e))
    return expr


def _rewrite_trig(expr: str, angle_mode: AngleMode) -> str:
    for name, regex in _TRIG_REGEXES.items():
        if angle_mode is AngleMode.DEGREES:
            expr = regex.sub(
                lambda m, name=name: f"math.{name}(({m.group(1)}) * math.pi / 180)",
                expr,
            )
        else:
            expr = regex.sub(lambda m, name=name: f"math.{name}({m.group(1)})", expr)
    return expr


def _rewrite_inverse_trig(expr: str, angle_mode: AngleMode) -> str:
    for name, regex in _INVERSE_TRIG_REGEXES.items():
        if angle_mode is AngleMode.DEGREES:
            expr = regex.sub(
                lambda m, name=name: f"(math.{name}({m.group(1)}) * 180 / math.pi)",
                expr,
            )
        else:
            expr = regex.sub(lambda m, name=name: f"math.{name}({m.group(1)})", expr)
    return expr


def _rewrite_logarithms(expr: str) -> str:
    for name, regex in _LOG_REGEXES.items():
        target = LOG_FUNCTIONS[name]
        expr = regex.sub(lambda m, target=target: f"{target}({m.group(1)})", expr)
    return expr


def _rewrite_direct(expr: str) -> str:
    for name, regex in _DIRECT_REGEXES.items():
        expr = regex.sub(lambda m, name=name: f"math.{name}({m.group(1)})", expr)
    return expr


def _rewrite_factorial(expr: str) -> str:
    return _FACTORIAL_REGEX.sub(lambda m: f"{FACTORIAL_NAME}({m.group(1)})", expr)


def _rewrite_power(expr: str) -> str:
    # Operands are whatever lies between the surrounding operators and
    # parentheses; there is no precedence handling around ^.
    return POWER_REGEX.sub(lambda m: f"math.pow({m.group(1)}, {m.group(2)})", expr)


def rewrite_functions(expr: str, angle_mode: AngleMode | str = AngleMode.DEGREES) -> str:
    """Expand named functions into the evaluator's qualified names.

    Passes run once each, in order: trigonometric, inverse trigonometric,
    logarithmic, direct (sqrt/abs/floor/ceil/round), factorial, power.

    Args:
        expr: Normalized expression
        angle_mode: Degrees converts trig arguments and inverse trig results

    Returns:
        Rewritten expression, e.g. "sin(30)" -> "math.sin((30) * math.pi / 180)"
    """
    mode = AngleMode.coerce(angle_mode)
    expr = _rewrite_trig(expr, mode)
    expr = _rewrite_inverse_trig(expr, mode)
    expr = _rewrite_logarithms(expr)
    expr = _rewrite_direct(expr)
    expr = _rewrite_factorial(expr)
    expr = _rewrite_power(expr)
    return expr


def preprocess(input_str: str, angle_mode: AngleMode | str = AngleMode.DEGREES) -> str:
    """Validate, normalize and rewrite a math expression for evaluation.

    Args:
        input_str: Raw math expression from the user
        angle_mode: Angle mode used for trigonometric rewriting

    Returns:
        Expression using only arithmetic and the evaluator's name table

    Raises:
        InvalidExpressionError: If input is empty, too long, or has
                                unbalanced parentheses/brackets
    """
    input_str = input_str.strip() if input_str else ""
    if not input_str:
        raise InvalidExpressionError("Input cannot be empty")
    if len(input_str) > MAX_INPUT_LENGTH:
        raise InvalidExpressionError(
            f"Input too long (>{MAX_INPUT_LENGTH} characters)"
        )
    balanced, position = is_balanced(input_str)
    if not balanced:
        logger.warning("Rejected unbalanced input at position %s", position)
        raise InvalidExpressionError(
            f"Invalid expression: unbalanced parentheses at position {position}"
        )

    normalized = normalize(input_str)
    rewritten = rewrite_functions(normalized, angle_mode)
    logger.debug("Rewrote %r -> %r", input_str, rewritten)
    return rewritten
