"""Domain classification for raw calculator input."""

from __future__ import annotations

from .config import ALGEBRA_KEYWORD_REGEX, GEOMETRY_KEYWORDS, VARIABLE_REGEX
from .logging_config import get_logger
from .types import Domain

logger = get_logger("classifier")


def is_geometry_expression(expr: str) -> bool:
    lowered = expr.lower()
    return any(keyword in lowered for keyword in GEOMETRY_KEYWORDS)


def is_algebra_expression(expr: str) -> bool:
    """Algebra keyword anywhere in the text, or a lowercase x/y/z together with '='.

    ``factorial(5)`` does not count as the ``factor`` keyword.
    """
    if ALGEBRA_KEYWORD_REGEX.search(expr):
        return True
    return bool(VARIABLE_REGEX.search(expr)) and "=" in expr


def classify(expr: str) -> Domain:
    """Decide which solver handles an expression.

    Geometry keywords win over algebra, and algebra over plain math.

    Example:
        >>> classify("area x=5 and x+2=7")
        <Domain.GEOMETRY: 'geometry'>
        >>> classify("2x + 3 = 7")
        <Domain.ALGEBRA: 'algebra'>
        >>> classify("sin(30)")
        <Domain.MATH: 'math'>
    """
    if is_geometry_expression(expr):
        domain = Domain.GEOMETRY
    elif is_algebra_expression(expr):
        domain = Domain.ALGEBRA
    else:
        domain = Domain.MATH
    logger.debug("Classified %r as %s", expr, domain.value)
    return domain
