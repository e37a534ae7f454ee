"""Safe arithmetic evaluation over a closed grammar.

Rewritten expressions are tokenized and evaluated by a recursive-descent
parser. The only names that resolve are the qualified constants and functions
in ``config.ALLOWED_CONSTANTS`` / ``config.ALLOWED_FUNCTIONS`` plus the
factorial helper; there is no access to Python objects, attributes or I/O.

Grammar::

    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/') unary)*
    unary   := ('+' | '-') unary | primary
    primary := NUMBER | NAME | NAME '(' expr (',' expr)* ')' | '(' expr ')'
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable

from .config import (
    ALLOWED_CONSTANTS,
    ALLOWED_FUNCTIONS,
    FACTORIAL_NAME,
    MAX_EXPRESSION_DEPTH,
    MAX_FACTORIAL,
    NAME_REGEX,
    NUMBER_REGEX,
)
from .logging_config import get_logger
from .types import (
    CalculationDomainError,
    CalculationError,
    InvalidExpressionError,
)

logger = get_logger("evaluator")

_PUNCTUATION = "+-*/(),"


@dataclass(frozen=True)
class Token:
    kind: str  # "number", "name", "op", "end"
    text: str
    position: int


def factorial(n: float) -> float:
    """Recursive factorial for non-negative integers.

    Raises:
        CalculationDomainError: If n is negative or not an integer
        InvalidExpressionError: If n! would overflow a double (n > 170)
    """
    if n < 0 or not float(n).is_integer():
        raise CalculationDomainError("Factorial requires non-negative integer")
    if n > MAX_FACTORIAL:
        raise InvalidExpressionError(
            f"Invalid expression: factorial argument exceeds {MAX_FACTORIAL}"
        )
    if n in (0, 1):
        return 1.0
    return n * factorial(n - 1)


FUNCTION_TABLE: dict[str, tuple[Callable[..., Any], int]] = {
    **ALLOWED_FUNCTIONS,
    FACTORIAL_NAME: (factorial, 1),
}


def tokenize(text: str) -> list[Token]:
    """Split a rewritten expression into tokens.

    Raises:
        InvalidExpressionError: On any character outside the grammar
    """
    tokens: list[Token] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char.isspace():
            i += 1
            continue
        if char in _PUNCTUATION:
            tokens.append(Token("op", char, i))
            i += 1
            continue
        match = NUMBER_REGEX.match(text, i)
        if match:
            tokens.append(Token("number", match.group(0), i))
            i = match.end()
            continue
        match = NAME_REGEX.match(text, i)
        if match:
            tokens.append(Token("name", match.group(0), i))
            i = match.end()
            continue
        raise InvalidExpressionError(
            f"Invalid expression: unexpected character {char!r} at position {i}"
        )
    tokens.append(Token("end", "", len(text)))
    return tokens


class _Parser:
    """Recursive-descent evaluator over a token list."""

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.index = 0
        self.depth = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        if token.kind != "end":
            self.index += 1
        return token

    def _expect(self, text: str) -> None:
        token = self._advance()
        if token.kind != "op" or token.text != text:
            raise InvalidExpressionError(
                f"Invalid expression: expected {text!r} at position {token.position}"
            )

    def _enter(self) -> None:
        self.depth += 1
        if self.depth > MAX_EXPRESSION_DEPTH:
            raise InvalidExpressionError(
                f"Expression too deeply nested (>{MAX_EXPRESSION_DEPTH} levels)"
            )

    def parse(self) -> float:
        value = self.expression()
        if self.current.kind != "end":
            raise InvalidExpressionError(
                f"Invalid expression: unexpected {self.current.text!r} "
                f"at position {self.current.position}"
            )
        return value

    def expression(self) -> float:
        value = self.term()
        while self.current.kind == "op" and self.current.text in "+-":
            op = self._advance().text
            right = self.term()
            value = value + right if op == "+" else value - right
        return value

    def term(self) -> float:
        value = self.unary()
        while self.current.kind == "op" and self.current.text in "*/":
            op = self._advance().text
            right = self.unary()
            if op == "*":
                value = value * right
            else:
                if right == 0:
                    raise InvalidExpressionError("Invalid calculation: division by zero")
                value = value / right
        return value

    def unary(self) -> float:
        if self.current.kind == "op" and self.current.text in "+-":
            op = self._advance().text
            self._enter()
            operand = self.unary()
            self.depth -= 1
            return operand if op == "+" else -operand
        return self.primary()

    def primary(self) -> float:
        token = self._advance()
        if token.kind == "number":
            return float(token.text)
        if token.kind == "op" and token.text == "(":
            self._enter()
            value = self.expression()
            self._expect(")")
            self.depth -= 1
            return value
        if token.kind == "name":
            if self.current.kind == "op" and self.current.text == "(":
                return self._call(token)
            if token.text in ALLOWED_CONSTANTS:
                return ALLOWED_CONSTANTS[token.text]
            raise InvalidExpressionError(
                f"Invalid expression: unknown name {token.text!r}"
            )
        if token.kind == "end":
            raise InvalidExpressionError("Invalid expression: unexpected end of input")
        raise InvalidExpressionError(
            f"Invalid expression: unexpected {token.text!r} at position {token.position}"
        )

    def _call(self, name: Token) -> float:
        if name.text not in FUNCTION_TABLE:
            raise InvalidExpressionError(
                f"Invalid expression: unknown function {name.text!r}"
            )
        func, arity = FUNCTION_TABLE[name.text]
        self._expect("(")
        self._enter()
        args = [self.expression()]
        while self.current.kind == "op" and self.current.text == ",":
            self._advance()
            args.append(self.expression())
        self._expect(")")
        self.depth -= 1
        if len(args) != arity:
            raise InvalidExpressionError(
                f"Invalid expression: {name.text} takes {arity} argument(s), got {len(args)}"
            )
        try:
            return float(func(*args))
        except CalculationError:
            raise
        except (ValueError, OverflowError, ZeroDivisionError) as e:
            raise InvalidExpressionError(f"Invalid calculation: {e}") from e


def evaluate(rewritten: str) -> float:
    """Evaluate a rewritten arithmetic expression.

    Args:
        rewritten: Output of ``parser.preprocess``

    Returns:
        The finite numeric value

    Raises:
        InvalidExpressionError: If the text is outside the grammar or the value
                                is NaN / infinite
        CalculationDomainError: If factorial receives a negative or fractional
                                argument
    """
    tokens = tokenize(rewritten)
    try:
        value = _Parser(tokens).parse()
    except OverflowError as e:
        raise InvalidExpressionError(f"Invalid calculation: {e}") from e
    if math.isnan(value) or math.isinf(value):
        logger.debug("Rejected non-finite value for %r", rewritten)
        raise InvalidExpressionError("Invalid calculation")
    return value
