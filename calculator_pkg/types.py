"""Type definitions and result dataclasses for consistent API responses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class AngleMode(str, Enum):
    """How trigonometric arguments and results are interpreted."""

    DEGREES = "degrees"
    RADIANS = "radians"

    @classmethod
    def coerce(cls, value: AngleMode | str) -> AngleMode:
        """Accept an AngleMode or its string value (case-insensitive)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown angle mode {value!r}; expected 'degrees' or 'radians'"
            ) from None


class Domain(str, Enum):
    """Calculation domain chosen by the classifier."""

    MATH = "math"
    ALGEBRA = "algebra"
    GEOMETRY = "geometry"


class ErrorKind(str, Enum):
    # UNSUPPORTED_OPERATION is reserved: unimplemented algebra requests are
    # reported as successful result strings, not errors.
    INVALID_EXPRESSION = "InvalidExpression"
    INVALID_FORMAT = "InvalidFormat"
    DOMAIN_ERROR = "DomainError"
    UNSUPPORTED_OPERATION = "UnsupportedOperation"


@dataclass
class CalculationResult:
    """Outcome of a single calculation: a result string or an error, never both."""

    ok: bool
    result: str | None = None
    error_kind: ErrorKind | None = None
    message: str | None = None
    domain: Domain | None = None

    @classmethod
    def success(cls, result: str, domain: Domain | None = None) -> CalculationResult:
        return cls(ok=True, result=result, domain=domain)

    @classmethod
    def failure(
        cls, error: CalculationError, domain: Domain | None = None
    ) -> CalculationResult:
        return cls(ok=False, error_kind=error.kind, message=error.message, domain=domain)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        if self.ok:
            return {"ok": True, "result": self.result}
        return {
            "ok": False,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "message": self.message,
        }

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            kind = self.error_kind.value if self.error_kind else None
            return f"CalculationResult(ok=False, error_kind={kind!r}, message={self.message!r})"
        return f"CalculationResult(ok=True, result={self.result!r})"


@dataclass
class HistoryEntry:
    """A successful calculation as recorded by the session."""

    expression: str
    result: str
    timestamp: str

    def to_dict(self) -> dict[str, str]:
        return {
            "expression": self.expression,
            "result": self.result,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryEntry:
        return cls(
            expression=str(data["expression"]),
            result=str(data["result"]),
            timestamp=str(data.get("timestamp", "")),
        )


class CalculationError(Exception):
    """Base class for every failure surfaced by ``calculate``."""

    kind = ErrorKind.INVALID_EXPRESSION

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class InvalidExpressionError(CalculationError):
    """Raised when arithmetic cannot be parsed or yields a non-finite value."""

    kind = ErrorKind.INVALID_EXPRESSION


class InvalidFormatError(CalculationError):
    """Raised when a geometry or equation query does not match its usage pattern."""

    kind = ErrorKind.INVALID_FORMAT


class CalculationDomainError(CalculationError):
    """Raised when an argument is outside a function's domain."""

    kind = ErrorKind.DOMAIN_ERROR
