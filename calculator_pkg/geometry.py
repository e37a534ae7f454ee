"""Geometry formulas addressed by keyword queries.

Queries are matched on the lowercased text in a fixed order (first match
wins) and their parameters are pulled out with ``key=value`` patterns::

    area circle r=5                 -> 78.5398163397 square units
    area triangle a=3 b=4 c=5       -> 6 square units
    area rectangle l=5 w=3          -> 15 square units
    volume sphere r=5               -> 523.5987755983 cubic units
    volume cylinder r=3 h=5         -> 141.3716694115 cubic units
    perimeter circle r=5            -> 31.4159265359 units
    distance (0,0) (3,4)            -> 5 units
"""

from __future__ import annotations

import math
import re
from typing import Callable

from .logging_config import get_logger
from .parser import format_result
from .types import CalculationDomainError, InvalidFormatError

logger = get_logger("geometry")

_NUM = r"(\d+\.?\d*)"

RADIUS_RE = re.compile(rf"r\s*=\s*{_NUM}")
TRIANGLE_RE = re.compile(rf"a\s*=\s*{_NUM}\s+b\s*=\s*{_NUM}\s+c\s*=\s*{_NUM}")
RECTANGLE_RE = re.compile(rf"l\s*=\s*{_NUM}\s+w\s*=\s*{_NUM}")
CYLINDER_RE = re.compile(rf"r\s*=\s*{_NUM}\s+h\s*=\s*{_NUM}")
DISTANCE_RE = re.compile(rf"\({_NUM},\s*{_NUM}\)\s+\({_NUM},\s*{_NUM}\)")

SQUARE_UNITS = "square units"
CUBIC_UNITS = "cubic units"
UNITS = "units"

NOT_RECOGNIZED = "Geometry calculation not recognized"


def _params(regex: re.Pattern[str], expr: str, shape: str, usage: str) -> list[float]:
    match = regex.search(expr)
    if not match:
        raise InvalidFormatError(f"Invalid {shape} format. Use: {usage}")
    return [float(group) for group in match.groups()]


def _with_unit(value: float, unit: str) -> str:
    return f"{format_result(value)} {unit}"


def circle_area(expr: str) -> str:
    (r,) = _params(RADIUS_RE, expr, "circle area", "area circle r=5")
    return _with_unit(math.pi * r * r, SQUARE_UNITS)


def triangle_area(expr: str) -> str:
    """Heron's formula from the three side lengths."""
    a, b, c = _params(TRIANGLE_RE, expr, "triangle area", "area triangle a=3 b=4 c=5")
    s = (a + b + c) / 2
    product = s * (s - a) * (s - b) * (s - c)
    if product < 0:
        raise CalculationDomainError(
            f"Sides {format_result(a)}, {format_result(b)}, {format_result(c)} "
            "do not form a triangle"
        )
    return _with_unit(math.sqrt(product), SQUARE_UNITS)


def rectangle_area(expr: str) -> str:
    length, width = _params(
        RECTANGLE_RE, expr, "rectangle area", "area rectangle l=5 w=3"
    )
    return _with_unit(length * width, SQUARE_UNITS)


def sphere_volume(expr: str) -> str:
    (r,) = _params(RADIUS_RE, expr, "sphere volume", "volume sphere r=5")
    return _with_unit((4 / 3) * math.pi * r * r * r, CUBIC_UNITS)


def cylinder_volume(expr: str) -> str:
    r, h = _params(CYLINDER_RE, expr, "cylinder volume", "volume cylinder r=3 h=5")
    return _with_unit(math.pi * r * r * h, CUBIC_UNITS)


def circle_perimeter(expr: str) -> str:
    (r,) = _params(RADIUS_RE, expr, "circle perimeter", "perimeter circle r=5")
    return _with_unit(2 * math.pi * r, UNITS)


def distance(expr: str) -> str:
    x1, y1, x2, y2 = _params(
        DISTANCE_RE, expr, "distance", "distance (x1,y1) (x2,y2)"
    )
    return _with_unit(math.sqrt((x2 - x1) ** 2 + (y2 - y1) ** 2), UNITS)


# Checked in order; the first query contained in the input wins.
GEOMETRY_HANDLERS: tuple[tuple[str, Callable[[str], str]], ...] = (
    ("area circle", circle_area),
    ("area triangle", triangle_area),
    ("area rectangle", rectangle_area),
    ("volume sphere", sphere_volume),
    ("volume cylinder", cylinder_volume),
    ("perimeter circle", circle_perimeter),
    ("distance", distance),
)


def solve_geometry(expr: str) -> str:
    """Dispatch a geometry-classified expression.

    Returns:
        "<value> <unit>", or "Geometry calculation not recognized"

    Raises:
        InvalidFormatError: If the query's parameters do not match its usage
        CalculationDomainError: If triangle sides violate the triangle inequality
    """
    lowered = expr.lower()
    for query, handler in GEOMETRY_HANDLERS:
        if query in lowered:
            logger.debug("Geometry query %r", query)
            return handler(lowered)
    return NOT_RECOGNIZED
