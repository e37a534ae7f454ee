"""Unit tests for parser module."""

import math
import unittest

from calculator_pkg.parser import (
    format_result,
    is_balanced,
    normalize,
    preprocess,
    rewrite_functions,
    superscriptify,
)
from calculator_pkg.types import AngleMode, InvalidExpressionError

PI = repr(math.pi)
E = repr(math.e)


class TestNormalize(unittest.TestCase):
    """Test notation normalization."""

    def test_display_symbols(self):
        self.assertEqual(normalize("2×3"), "2*3")
        self.assertEqual(normalize("6÷2"), "6/2")
        self.assertEqual(normalize("5−2"), "5-2")

    def test_implicit_multiplication_parentheses(self):
        self.assertEqual(normalize("2(3+4)"), "2*(3+4)")
        self.assertEqual(normalize("(3+4)2"), "(3+4)*2")

    def test_constants(self):
        self.assertEqual(normalize("PI"), PI)
        self.assertEqual(normalize("E"), E)
        self.assertEqual(normalize("π"), PI)

    def test_implicit_multiplication_constants(self):
        self.assertEqual(normalize("2PI"), "2*" + PI)
        self.assertEqual(normalize("2π"), "2*" + PI)
        self.assertEqual(normalize("3E"), "3*" + E)

    def test_lowercase_constants_untouched(self):
        self.assertEqual(normalize("pi + e"), "pi + e")

    def test_constant_before_paren_not_multiplied(self):
        self.assertEqual(normalize("PI(2)"), PI + "(2)")


class TestRewriteFunctions(unittest.TestCase):
    """Test function rewriting passes."""

    def test_trig_degrees(self):
        self.assertEqual(
            rewrite_functions("sin(30)", AngleMode.DEGREES),
            "math.sin((30) * math.pi / 180)",
        )

    def test_trig_radians(self):
        self.assertEqual(rewrite_functions("cos(1)", "radians"), "math.cos(1)")

    def test_inverse_trig_degrees(self):
        self.assertEqual(
            rewrite_functions("asin(0.5)", "degrees"),
            "(math.asin(0.5) * 180 / math.pi)",
        )

    def test_inverse_trig_not_rewritten_as_trig(self):
        self.assertEqual(rewrite_functions("atan(1)", "radians"), "math.atan(1)")

    def test_logarithms(self):
        self.assertEqual(rewrite_functions("log(100)"), "math.log10(100)")
        self.assertEqual(rewrite_functions("ln(5)"), "math.log(5)")
        self.assertEqual(rewrite_functions("exp(1)"), "math.exp(1)")

    def test_direct_functions(self):
        for name in ("sqrt", "abs", "floor", "ceil", "round"):
            self.assertEqual(rewrite_functions(f"{name}(2)"), f"math.{name}(2)")

    def test_factorial(self):
        self.assertEqual(rewrite_functions("factorial(5)"), "calc.factorial(5)")

    def test_power(self):
        self.assertEqual(rewrite_functions("2^3"), "math.pow(2, 3)")
        self.assertEqual(rewrite_functions("2*3^2"), "2*math.pow(3, 2)")

    def test_nested_same_function_partially_rewritten(self):
        # The argument stops at the first ')', so the inner call is left as typed
        self.assertEqual(rewrite_functions("sqrt(sqrt(16))"), "math.sqrt(sqrt(16))")

    def test_invalid_angle_mode(self):
        with self.assertRaises(ValueError):
            rewrite_functions("sin(30)", "gradians")


class TestPreprocess(unittest.TestCase):
    """Test input validation in preprocess."""

    def test_pipeline(self):
        self.assertEqual(preprocess(" 2(3) "), "2*(3)")
        self.assertEqual(preprocess("2*sin(90)", AngleMode.RADIANS), "2*math.sin(90)")

    def test_digit_before_function_not_multiplied(self):
        self.assertEqual(preprocess("2sqrt(4)"), "2sqrt(4)")

    def test_empty_input(self):
        with self.assertRaises(InvalidExpressionError):
            preprocess("")
        with self.assertRaises(InvalidExpressionError):
            preprocess("   ")

    def test_input_length_limit(self):
        from calculator_pkg.config import MAX_INPUT_LENGTH

        with self.assertRaises(InvalidExpressionError):
            preprocess("1" * (MAX_INPUT_LENGTH + 1))

    def test_unbalanced(self):
        with self.assertRaises(InvalidExpressionError):
            preprocess("(1+2")

    def test_parentheses_balancing(self):
        balanced, _ = is_balanced("(1+2)")
        self.assertTrue(balanced)
        balanced, _ = is_balanced("((1+2)*3)")
        self.assertTrue(balanced)
        balanced, position = is_balanced("(1+2")
        self.assertFalse(balanced)
        self.assertEqual(position, 0)
        balanced, position = is_balanced("1+2)")
        self.assertFalse(balanced)
        self.assertEqual(position, 3)


class TestFormatResult(unittest.TestCase):
    """Test result formatting."""

    def test_integers(self):
        self.assertEqual(format_result(4.0), "4")
        self.assertEqual(format_result(-12), "-12")
        self.assertEqual(format_result(-0.0), "0")
        self.assertEqual(format_result(1e20), "100000000000000000000")

    def test_rounding(self):
        self.assertEqual(format_result(math.pi * 25), "78.5398163397")
        self.assertEqual(format_result(0.1 + 0.2), "0.3")
        self.assertEqual(format_result(1 / 3), "0.3333333333")
        self.assertEqual(format_result(2 / 3), "0.6666666667")

    def test_rounds_to_integer(self):
        self.assertEqual(format_result(0.99999999999999), "1")
        self.assertEqual(format_result(-1e-12), "0")

    def test_no_exponential_notation(self):
        self.assertEqual(format_result(1.5e-7), "0.00000015")
        self.assertNotIn("e", format_result(123456789.123))

    def test_idempotent(self):
        for value in (math.pi, -math.e, 1 / 7, 78.53981633974483, 1e-9, 2.5, 1e15 + 0.5):
            once = format_result(value)
            self.assertEqual(format_result(float(once)), once)

    def test_integers_have_no_decimal_point(self):
        for value in (0, 7, -3, 2**40, 170.0):
            self.assertNotIn(".", format_result(value))

    def test_non_finite_rejected(self):
        with self.assertRaises(InvalidExpressionError):
            format_result(float("inf"))
        with self.assertRaises(InvalidExpressionError):
            format_result(float("nan"))

    def test_superscriptify(self):
        self.assertEqual(superscriptify("2"), "²")
        self.assertEqual(superscriptify("-10"), "⁻¹⁰")


if __name__ == "__main__":
    unittest.main()
