"""Public API for the calculator - returns structured objects without side effects."""

from __future__ import annotations

from .classifier import classify
from .evaluator import evaluate as _evaluate
from .geometry import solve_geometry
from .logging_config import get_logger
from .parser import format_result, preprocess
from .solver import solve_algebra
from .types import (
    AngleMode,
    CalculationError,
    CalculationResult,
    Domain,
    InvalidExpressionError,
)

logger = get_logger("api")


def calculate(
    expression: str, angle_mode: AngleMode | str = AngleMode.DEGREES
) -> CalculationResult:
    """Classify and evaluate one expression.

    Args:
        expression: Raw input (e.g., "sin(30)", "2x + 3 = 7", "area circle r=5")
        angle_mode: "degrees" or "radians"; only trigonometric math is affected

    Returns:
        CalculationResult with either ``result`` or ``error_kind``/``message``

    Raises:
        ValueError: If angle_mode is not a known mode

    Example:
        >>> from calculator_pkg.api import calculate
        >>> calculate("sin(30)").result
        '0.5'
        >>> calculate("area circle r=5").result
        '78.5398163397 square units'
        >>> calculate("area circle x=5").error_kind.value
        'InvalidFormat'
    """
    mode = AngleMode.coerce(angle_mode)
    expression = expression.strip() if expression else ""
    if not expression:
        return CalculationResult.failure(InvalidExpressionError("Input cannot be empty"))

    domain = classify(expression)
    try:
        if domain is Domain.GEOMETRY:
            result = solve_geometry(expression)
        elif domain is Domain.ALGEBRA:
            result = solve_algebra(expression)
        else:
            result = format_result(_evaluate(preprocess(expression, mode)))
    except CalculationError as e:
        logger.info("Calculation of %r failed (%s): %s", expression, e.kind.value, e)
        return CalculationResult.failure(e, domain)
    except (ArithmeticError, ValueError, RecursionError) as e:
        logger.warning("Unexpected error calculating %r: %s", expression, e, exc_info=True)
        return CalculationResult.failure(
            InvalidExpressionError("Invalid expression"), domain
        )
    return CalculationResult.success(result, domain)


def evaluate(expression: str, angle_mode: AngleMode | str = AngleMode.DEGREES) -> float:
    """Evaluate a math expression to a number, bypassing classification.

    Raises:
        CalculationError: On malformed input or a non-finite value
    """
    return _evaluate(preprocess(expression, angle_mode))


def validate_expression(
    expression: str, angle_mode: AngleMode | str = AngleMode.DEGREES
) -> tuple[bool, str | None]:
    """Check whether a math expression evaluates, without formatting it.

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> validate_expression("2 + 2")
        (True, None)
        >>> validate_expression("2 +")
        (False, 'Invalid expression: unexpected end of input')
    """
    try:
        evaluate(expression, angle_mode)
        return True, None
    except CalculationError as e:
        return False, e.message


__all__ = ["calculate", "classify", "evaluate", "validate_expression"]
