"""Centralized configuration for the calculator.

This module defines:
- Angle mode default and history limits
- Input validation limits (length, nesting depth)
- Output precision and factorial bounds
- The closed name table the safe evaluator resolves against
- Regex patterns for notation normalization and rewriting

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with CALCULATOR_)
"""

import math
import os
import re
from pathlib import Path

try:
    import importlib.metadata

    VERSION = importlib.metadata.version("advanced-calculator")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout
    VERSION = "1.0.0"

# Session configuration
DEFAULT_ANGLE_MODE = os.getenv("CALCULATOR_ANGLE_MODE", "degrees").lower()
HISTORY_LIMIT = int(os.getenv("CALCULATOR_HISTORY_LIMIT", "50"))
HISTORY_FILE = Path(
    os.getenv(
        "CALCULATOR_HISTORY_FILE",
        str(Path.home() / ".calculator_history" / "history.json"),
    )
)

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("CALCULATOR_MAX_INPUT_LENGTH", "10000"))  # characters
MAX_EXPRESSION_DEPTH = int(
    os.getenv("CALCULATOR_MAX_EXPRESSION_DEPTH", "100")
)  # parenthesis / call nesting

# Numeric configuration
OUTPUT_DECIMALS = int(os.getenv("CALCULATOR_OUTPUT_DECIMALS", "10"))
MAX_FACTORIAL = 170  # 171! overflows a double

# Names reachable from evaluated text. Rewritten input only ever refers to
# these qualified names; anything else is an unknown identifier.
ALLOWED_CONSTANTS = {
    "math.pi": math.pi,
    "math.e": math.e,
}


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


ALLOWED_FUNCTIONS = {
    # name: (callable, arity)
    "math.sin": (math.sin, 1),
    "math.cos": (math.cos, 1),
    "math.tan": (math.tan, 1),
    "math.asin": (math.asin, 1),
    "math.acos": (math.acos, 1),
    "math.atan": (math.atan, 1),
    "math.log10": (math.log10, 1),
    "math.log": (math.log, 1),
    "math.exp": (math.exp, 1),
    "math.sqrt": (math.sqrt, 1),
    "math.abs": (abs, 1),
    "math.floor": (math.floor, 1),
    "math.ceil": (math.ceil, 1),
    "math.round": (_round_half_up, 1),
    "math.pow": (math.pow, 2),
}

FACTORIAL_NAME = "calc.factorial"

# Domain classification keywords
GEOMETRY_KEYWORDS = ("area", "volume", "perimeter", "distance", "midpoint", "slope")
# Keywords match anywhere in the text; "factor" never matches inside "factorial".
ALGEBRA_KEYWORD_REGEX = re.compile(
    r"solve|expand|factor(?!ial)|simplify|derivative|integral", re.IGNORECASE
)
VARIABLE_REGEX = re.compile(r"[xyz]")

# Notation normalization
DIGIT_PAREN_REGEX = re.compile(r"(\d)\(")
PAREN_DIGIT_REGEX = re.compile(r"\)(\d)")
DIGIT_CONSTANT_REGEX = re.compile(r"(\d)(PI|E)")

# Function rewriting: a name must not continue an identifier or a qualified name
FUNC_PREFIX = r"(?<![\w.])"
POWER_REGEX = re.compile(r"([^*+\-/()]+)\^([^*+\-/()]+)")

# Evaluator tokens
NUMBER_REGEX = re.compile(r"\d+\.?\d*|\.\d+")
NAME_REGEX = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*")
