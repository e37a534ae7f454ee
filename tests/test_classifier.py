"""Unit tests for domain classification."""

import unittest

from calculator_pkg.classifier import classify, is_algebra_expression, is_geometry_expression
from calculator_pkg.types import Domain


class TestClassify(unittest.TestCase):
    def test_geometry_keywords(self):
        for expr in (
            "area circle r=5",
            "Volume Sphere r=2",
            "perimeter circle r=1",
            "distance (0,0) (3,4)",
            "midpoint (0,0) (2,2)",
            "slope (1,1) (2,3)",
        ):
            self.assertEqual(classify(expr), Domain.GEOMETRY, expr)

    def test_geometry_takes_priority_over_algebra(self):
        self.assertEqual(classify("area x=5 and x+2=7"), Domain.GEOMETRY)

    def test_algebra_keywords(self):
        for expr in (
            "solve(x^2 - 4)",
            "expand((a+b)^2)",
            "factor(x^2-4)",
            "SIMPLIFY(2*a)",
            "derivative of x^2",
            "integral(x)",
        ):
            self.assertEqual(classify(expr), Domain.ALGEBRA, expr)

    def test_variable_with_equals_is_algebra(self):
        self.assertEqual(classify("2x + 3 = 7"), Domain.ALGEBRA)
        self.assertEqual(classify("y = 3"), Domain.ALGEBRA)

    def test_variable_without_equals_is_math(self):
        self.assertEqual(classify("exp(1)"), Domain.MATH)
        self.assertFalse(is_algebra_expression("x + 1"))

    def test_uppercase_variable_is_not_a_variable(self):
        self.assertEqual(classify("X = 5"), Domain.MATH)

    def test_factorial_is_not_factor(self):
        self.assertEqual(classify("factorial(5)"), Domain.MATH)
        self.assertEqual(classify("factorial(-3)"), Domain.MATH)
        self.assertEqual(classify("factor(x^2-4)"), Domain.ALGEBRA)

    def test_keyword_inside_a_word(self):
        self.assertEqual(classify("integrals of x"), Domain.ALGEBRA)
        self.assertEqual(classify("2solve(1)"), Domain.ALGEBRA)
        self.assertEqual(classify("resolve 3"), Domain.ALGEBRA)

    def test_plain_math(self):
        self.assertEqual(classify("2 + 3 * 4"), Domain.MATH)
        self.assertEqual(classify("sin(30)"), Domain.MATH)
        self.assertFalse(is_geometry_expression("sqrt(16)"))


if __name__ == "__main__":
    unittest.main()
