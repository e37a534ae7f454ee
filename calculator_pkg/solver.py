"""Algebra solving for the constrained equation grammar.

This module provides:
- Single-variable linear equations of the form ``ax ± b = c`` (solved exactly
  with SymPy rationals)
- ``solve(...)`` wrapping such an equation
- ``expand(...)`` for the ``(A+B)^2`` pattern only
- Fixed responses for ``factor(...)``, ``simplify(...)`` and anything else

Requests the solver recognizes but cannot answer return a message as a
successful result; only malformed equations raise ``InvalidFormatError``.
"""

from __future__ import annotations

import re
from fractions import Fraction
from typing import Optional

import sympy as sp

from .logging_config import get_logger
from .parser import format_result, superscriptify
from .types import InvalidFormatError

logger = get_logger("solver")

LINEAR_EQUATION_RE = re.compile(r"(-?\d*\.?\d*)x\s*([+-])\s*(\d+\.?\d*)")
LEADING_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+))")
SOLVE_CALL_RE = re.compile(r"solve\(([^)]+)\)")
SQUARE_OF_SUM_RE = re.compile(r"\(([^+]+)\+([^)]+)\)\^2")

COULD_NOT_SOLVE = "Could not solve equation"
SOLVE_NEEDS_EQUATION = "Solve function requires an equation"
EXPAND_LIMITED = "Expand function limited to simple cases"
FACTOR_NOT_IMPLEMENTED = "Factor function not implemented yet"
SIMPLIFY_NOT_IMPLEMENTED = "Simplify function not implemented yet"
ALGEBRA_NOT_SUPPORTED = "Algebra calculation not supported yet"

EQUATION_USAGE = "2x + 3 = 7"


def _parse_coefficient(text: str) -> Optional[Fraction]:
    """Coefficient in front of x: empty means 1, a lone '-' means -1."""
    if text == "":
        return Fraction(1)
    if text == "-":
        return Fraction(-1)
    try:
        return Fraction(text)
    except ValueError:
        return None


def _parse_right_side(text: str) -> Fraction:
    match = LEADING_NUMBER_RE.match(text)
    if not match:
        raise InvalidFormatError(f"Invalid equation format. Use: {EQUATION_USAGE}")
    return Fraction(match.group(1))


def _to_rational(value: Fraction) -> sp.Rational:
    return sp.Rational(value.numerator, value.denominator)


def solve_linear_equation(equation: str) -> str:
    """Solve ``ax + b = c`` or ``ax - b = c`` for x.

    Args:
        equation: Equation text containing '='

    Returns:
        "x = <value>" on success, otherwise "Could not solve equation"

    Raises:
        InvalidFormatError: If the left side matches but the right side has no
                            leading number

    Example:
        >>> solve_linear_equation("2x + 3 = 7")
        'x = 2'
        >>> solve_linear_equation("x^2 = 4")
        'Could not solve equation'
    """
    parts = equation.split("=")
    left = parts[0].strip()
    right = parts[1].strip() if len(parts) > 1 else ""

    match = LINEAR_EQUATION_RE.search(left)
    if not match:
        logger.debug("Left side %r is not of the form ax ± b", left)
        return COULD_NOT_SOLVE

    a = _parse_coefficient(match.group(1))
    if a is None or a == 0:
        return COULD_NOT_SOLVE
    b = Fraction(match.group(3))
    c = _parse_right_side(right)
    sign = 1 if match.group(2) == "+" else -1

    x = sp.Symbol("x")
    lhs = _to_rational(a) * x + sign * _to_rational(b)
    solutions = sp.solve(sp.Eq(lhs, _to_rational(c)), x)
    if len(solutions) != 1:
        return COULD_NOT_SOLVE
    return f"x = {format_result(float(solutions[0]))}"


def solve_expression(expr: str) -> str:
    """Handle ``solve(...)``: the text up to the first ')' must be an equation."""
    match = SOLVE_CALL_RE.search(expr)
    if match and "=" in match.group(1):
        return solve_linear_equation(match.group(1))
    return SOLVE_NEEDS_EQUATION


def expand_expression(expr: str) -> str:
    """Handle ``expand((A+B)^2)`` symbolically; every other shape is declined.

    Example:
        >>> expand_expression("expand((a+b)^2)")
        'a² + 2(a)(b) + b²'
    """
    body = expr[len("expand("):]
    match = SQUARE_OF_SUM_RE.search(body)
    if not match:
        return EXPAND_LIMITED
    a = match.group(1).strip()
    b = match.group(2).strip()
    squared = superscriptify("2")
    return f"{a}{squared} + 2({a})({b}) + {b}{squared}"


def solve_algebra(expr: str) -> str:
    """Dispatch an algebra-classified expression.

    Order: any '=' goes to the linear solver, then the ``solve(``,
    ``expand(``, ``factor(`` and ``simplify(`` prefixes; anything else is
    not supported.
    """
    lowered = expr.lower()
    if "=" in expr:
        return solve_linear_equation(expr)
    if lowered.startswith("solve("):
        return solve_expression(expr)
    if lowered.startswith("expand("):
        return expand_expression(expr)
    if lowered.startswith("factor("):
        return FACTOR_NOT_IMPLEMENTED
    if lowered.startswith("simplify("):
        return SIMPLIFY_NOT_IMPLEMENTED
    return ALGEBRA_NOT_SUPPORTED
